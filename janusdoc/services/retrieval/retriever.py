from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Collection, Sequence

import redis

from janusdoc.core.config import settings
from janusdoc.core.errors import ModelMismatch
from janusdoc.services.cache.cache_keys import normalize_query, qemb_key, retr_key, sha256_hex
from janusdoc.services.indexing.vector_index import VectorIndex
from janusdoc.services.retrieval.similarity import cosine_similarity
from janusdoc.storage.files import get_project_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    path: str
    content: str  # best matching chunk of that doc
    similarity: float


def search_similar_docs(
    query_vec: Sequence[float],
    index: VectorIndex,
    top_n: int | None = None,
    threshold: float | None = None,
    paths: Collection[str] | None = None,
) -> list[SearchResult]:
    """
    Score every chunk against the query, keep chunks >= threshold,
    best chunk per document, at most top_n documents (best first).
    paths, when given, restricts scoring to those documents before top_n applies.
    An empty list means nothing was relevant enough.
    """
    if top_n is None:
        top_n = settings.DEFAULT_TOP_N
    if threshold is None:
        threshold = settings.DEFAULT_THRESHOLD

    results: list[SearchResult] = []
    for doc in index.documents:
        if paths is not None and doc.path not in paths:
            continue
        for chunk in doc.chunks:
            sim = cosine_similarity(query_vec, chunk.embedding)
            if sim >= threshold:
                results.append(SearchResult(path=doc.path, content=chunk.content, similarity=sim))

    # stable sort, ties keep index order
    results.sort(key=lambda r: r.similarity, reverse=True)

    seen: set[str] = set()
    deduped: list[SearchResult] = []
    for r in results:
        if r.path in seen:
            continue
        seen.add(r.path)
        deduped.append(r)

    return deduped[: max(top_n, 0)]


def ensure_model_matches(index: VectorIndex, model: str) -> None:
    if index.model != model:
        raise ModelMismatch(index.model, model)


class RetrieverService:
    def __init__(
        self,
        embedding_service,
        cache=None,
        enforce_model_match: bool | None = None,
        project_dir: str | None = None,
    ):
        self.embedding_service = embedding_service
        self.cache = cache
        self.project_dir = project_dir
        self.enforce_model_match = (
            settings.ENFORCE_MODEL_MATCH if enforce_model_match is None else enforce_model_match
        )

    @property
    def model_name(self) -> str:
        return getattr(self.embedding_service, "model_name", settings.EMBEDDING_MODEL_NAME)

    def index_version(self, index: VectorIndex) -> str:
        # projects can share one redis
        project = sha256_hex(str(get_project_root(self.project_dir).resolve()))[:12]

        return f"{index.model}@{index.generated_at}@{project}"

    def _cache_enabled(self) -> bool:
        return self.cache is not None and settings.ENABLE_CACHE

    def embed_query(self, query: str) -> list[float]:
        """
        One provider call per query, reused through the cache when possible.
        """
        qn = normalize_query(query)

        if not self._cache_enabled():
            return self.embedding_service.embed(qn)

        key = qemb_key(self.model_name, qn)
        try:
            cached = self.cache.get_embedding(key)
            if cached.hit:
                return [float(x) for x in cached.value.reshape(-1)]
        except redis.RedisError:
            logger.warning("query embedding cache read failed", exc_info=True)

        vec = self.embedding_service.embed(qn)

        try:
            self.cache.set_embedding(key, vec, settings.CACHE_TTL_SECONDS)
        except redis.RedisError:
            logger.warning("query embedding cache write failed", exc_info=True)

        return vec

    def search(
        self,
        query: str,
        index: VectorIndex,
        top_n: int | None = None,
        threshold: float | None = None,
        paths: Collection[str] | None = None,
    ) -> list[SearchResult]:
        if not query or not query.strip():
            return []

        if top_n is None:
            top_n = settings.DEFAULT_TOP_N
        if threshold is None:
            threshold = settings.DEFAULT_THRESHOLD

        if self.enforce_model_match:
            ensure_model_matches(index, self.model_name)

        rk = retr_key(
            self.model_name,
            self.index_version(index),
            query,
            top_n,
            threshold,
            paths=paths,
        )
        if self._cache_enabled():
            try:
                rc = self.cache.get_json(rk)
                if rc.hit:
                    logger.info("search cache_hit=1 hits=%d", len(rc.value))
                    return [SearchResult(**h) for h in rc.value]
            except redis.RedisError:
                logger.warning("search cache read failed", exc_info=True)

        q_vec = self.embed_query(query)
        hits = search_similar_docs(q_vec, index, top_n=top_n, threshold=threshold, paths=paths)

        if self._cache_enabled():
            try:
                self.cache.set_json(rk, [asdict(h) for h in hits], settings.CACHE_TTL_SECONDS)
            except redis.RedisError:
                logger.warning("search cache write failed", exc_info=True)

        logger.info(
            "search cache_hit=0 chunks=%d hits=%d top_n=%d threshold=%.2f",
            index.chunk_count,
            len(hits),
            top_n,
            threshold,
        )

        return hits
