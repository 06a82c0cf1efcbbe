from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np
from sentence_transformers import SentenceTransformer

from janusdoc.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmbedConfig:
    model_name: str
    batch_size: int
    normalize: bool


class EmbeddingService:
    """
    Singleton service (load this only once, model load is slow)
    """

    def __init__(self, cfg: EmbedConfig):
        self.cfg = cfg
        self._model: SentenceTransformer | None = None

    @property
    def model_name(self) -> str:
        return self.cfg.model_name

    def load(self) -> None:
        if self._model is None:
            self._model = SentenceTransformer(self.cfg.model_name)

    @property
    def model(self) -> SentenceTransformer:
        if self._model is None:
            raise RuntimeError("Embedding model is not loaded. Call load() first.")

        return self._model

    def encode_texts(self, texts: list[str]) -> np.ndarray:
        """
        This returns float32 embeddings.
        Embeddings size: (N x D):
            - N number of texts
            - D dimension
        """
        t0 = time.perf_counter()
        emb = self.model.encode(
            texts,
            batch_size=self.cfg.batch_size,
            normalize_embeddings=self.cfg.normalize,
            convert_to_numpy=True,
            show_progress_bar=False,
        )

        arr = np.asarray(emb, dtype=np.float32)
        logger.debug("encoded %d texts in %.2f ms", len(texts), (time.perf_counter() - t0) * 1000)

        return arr

    def embed_many(self, texts: list[str]) -> list[list[float]]:
        # one vector per input, same order
        if not texts:
            return []

        return self.encode_texts(texts).tolist()

    def embed(self, text: str) -> list[float]:
        return self.embed_many([text])[0]


def default_embedding_service() -> EmbeddingService:
    cfg = EmbedConfig(
        model_name=settings.EMBEDDING_MODEL_NAME,
        batch_size=settings.EMBEDDING_BATCH_SIZE,
        normalize=settings.EMBEDDING_NORMALIZE,
    )

    svc = EmbeddingService(cfg)

    return svc
