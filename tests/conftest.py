"""Shared test fixtures for hf-inference tests."""

import pytest


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

MOCK_ENDPOINT = "http://localhost:8080/models"
MOCK_API_KEY = "mock"

FILL_MASK_MODEL = "google-bert/bert-base-uncased"
FILL_MASK_INPUTS = "I love to eat [MASK]."
FILL_MASK_URL = f"{MOCK_ENDPOINT}/{FILL_MASK_MODEL}"

MOCK_FILL_MASK_RESPONSE = [
    {"score": 0.1976442039012909, "token": 2009, "token_str": "it", "sequence": "i love to eat it."},
    {"score": 0.0641617551445961, "token": 2068, "token_str": "them", "sequence": "i love to eat them."},
    {"score": 0.0430656224489212, "token": 2833, "token_str": "food", "sequence": "i love to eat food."},
    {"score": 0.0288424789905548, "token": 5440, "token_str": "pizza", "sequence": "i love to eat pizza."},
    {"score": 0.0248765833675861, "token": 6240, "token_str": "meat", "sequence": "i love to eat meat."},
]

TEXT_CLASSIFICATION_MODEL = "cardiffnlp/twitter-roberta-base-sentiment-latest"
TEXT_CLASSIFICATION_URL = f"{MOCK_ENDPOINT}/{TEXT_CLASSIFICATION_MODEL}"

MOCK_TEXT_CLASSIFICATION_RESPONSE = [
    [
        {"label": "negative", "score": 0.7236},
        {"label": "neutral", "score": 0.2287},
        {"label": "positive", "score": 0.0477},
    ]
]

MOCK_MODEL_LOADING_RESPONSE = (
    '{"error":"Model google-bert/bert-base-uncased is currently loading",'
    '"estimated_time":20.0}'
)


# ─────────────────────────────────────────────────────────────────────
# FIXTURES
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def fill_mask_task():
    """Inference task for the fill-mask scenario against the mock endpoint."""
    from hf_inference.task import Inference
    return Inference(
        api_key=MOCK_API_KEY,
        model=FILL_MASK_MODEL,
        inputs=FILL_MASK_INPUTS,
        endpoint=MOCK_ENDPOINT,
    )


@pytest.fixture
def fill_mask_request():
    """OutboundRequest for the fill-mask scenario."""
    from hf_inference.request_builder import build_request
    return build_request(
        endpoint=MOCK_ENDPOINT,
        model=FILL_MASK_MODEL,
        inputs=FILL_MASK_INPUTS,
        api_key=MOCK_API_KEY,
    )
