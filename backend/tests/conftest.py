"""Shared test configuration, pytest markers and stub embedders."""

import re
import threading

import numpy as np
import pytest

from services.embedding_provider import EmbeddingProvider
from services.errors import EmbeddingUnavailable
from services.profile_store import InMemoryProfileStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads the real embedding model (slow, downloads weights)"
    )


class StubEmbedder(EmbeddingProvider):
    """Bag-of-words embedder: each distinct token gets its own axis.

    Texts sharing no tokens are exactly orthogonal, identical texts score 100.
    """

    model_name = "stub-bow"
    DIM = 512

    def __init__(self) -> None:
        super().__init__()
        self._vocab: dict[str, int] = {}
        self._vocab_lock = threading.Lock()
        self.calls = 0

    def load(self) -> None:
        pass

    def encode(self, text: str) -> np.ndarray:
        vec = np.zeros(self.DIM, dtype=np.float32)
        with self._vocab_lock:
            self.calls += 1
            for token in re.findall(r"[a-z0-9]+", text.lower()):
                idx = self._vocab.setdefault(token, len(self._vocab) % self.DIM)
                vec[idx] += 1.0
        norm = np.linalg.norm(vec)
        return vec / norm if norm else vec


class FailingEmbedder(EmbeddingProvider):
    model_name = "broken"

    def load(self) -> None:
        pass

    def encode(self, text: str) -> np.ndarray:
        raise EmbeddingUnavailable("model failed to load")


def startup_doc(**overrides) -> dict:
    doc = {
        "id": "s1",
        "name": "Acme Pay",
        "sector": "Fintech",
        "stage": "Seed",
        "description": "payments API for SMBs",
        "funding_required": {"min": 50000, "max": 200000},
        "tags": ["payments", "api"],
        "location": "Berlin, Germany",
    }
    doc.update(overrides)
    return doc


def investor_doc(ident: str, **overrides) -> dict:
    doc = {
        "id": ident,
        "name": f"Investor {ident}",
        "sectors": ["Fintech"],
        "preferred_stages": ["Seed"],
        "investment_range": {"min": 100000, "max": 500000},
        "geographic_focus": [],
        "bio": "",
        "looking_for": "",
    }
    doc.update(overrides)
    return doc


def advisor_doc(ident: str, **overrides) -> dict:
    doc = {
        "id": ident,
        "name": f"Advisor {ident}",
        "industries": ["Fintech"],
        "years_of_experience": 12,
        "bio": "",
        "specializations": ["Finance & Fundraising"],
        "expertise_areas": [],
        "average_rating": 4.0,
        "availability": "Available",
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def stub_embedder() -> StubEmbedder:
    return StubEmbedder()


@pytest.fixture
def failing_embedder() -> FailingEmbedder:
    return FailingEmbedder()


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    store = InMemoryProfileStore()
    store.add_startup(startup_doc())
    return store
