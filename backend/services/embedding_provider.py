"""Text embedding providers for semantic match scoring.

The provider is constructed once by the app and passed to the match
generator. The underlying model is loaded lazily on first use; the load
is guarded by a lock so concurrent scoring threads never build two
model handles.
"""

import logging
import threading
from abc import ABC, abstractmethod

import numpy as np

from services.errors import EmbeddingUnavailable

logger = logging.getLogger(__name__)


class EmbeddingProvider(ABC):
    """Base class for text embedding providers.

    Subclasses must implement:
        - load(): load model artifacts into memory
        - encode(text): return a unit-length vector for text
    """

    model_name: str = ""

    def __init__(self) -> None:
        self._loaded = False
        self._load_lock = threading.Lock()

    @abstractmethod
    def load(self) -> None:
        """Load model weights/artifacts. Called at most once per provider."""

    @abstractmethod
    def encode(self, text: str) -> np.ndarray:
        """Encode text into a fixed-length vector."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load model if not already loaded."""
        if self._loaded:
            return
        with self._load_lock:
            if self._loaded:
                return
            logger.info("Loading embedding model: %s", self.model_name)
            self.load()
            self._loaded = True

    def embed(self, text: str) -> np.ndarray:
        """Return the embedding for text, raising EmbeddingUnavailable on failure."""
        self.ensure_loaded()
        return self.encode(text)


class SentenceTransformerEmbedder(EmbeddingProvider):
    """Embeddings from a SentenceTransformer model (MiniLM by default).

    A failed load is remembered: every later embed() call raises
    EmbeddingUnavailable without retrying the download.
    """

    def __init__(self, model_name: str) -> None:
        super().__init__()
        self.model_name = model_name
        self._model = None
        self._load_error: Exception | None = None

    def _build_model(self):
        from sentence_transformers import SentenceTransformer

        return SentenceTransformer(self.model_name)

    def load(self) -> None:
        try:
            self._model = self._build_model()
            logger.info("Embedding model %s loaded successfully", self.model_name)
        except Exception as e:
            self._load_error = e
            logger.warning("Failed to load embedding model %s: %s", self.model_name, e)

    def encode(self, text: str) -> np.ndarray:
        if self._model is None:
            raise EmbeddingUnavailable(
                f"Embedding model {self.model_name} unavailable: {self._load_error}"
            )
        try:
            vector = self._model.encode(text, convert_to_numpy=True, normalize_embeddings=True)
        except Exception as e:
            raise EmbeddingUnavailable(f"Encoding failed: {e}") from e
        return np.asarray(vector, dtype=np.float32)
