from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator

from janusdoc.core.config import settings
from janusdoc.core.errors import IndexNotFound
from janusdoc.services.indexing.chunking import chunk_text, validate_chunking
from janusdoc.storage.docs import DocFile
from janusdoc.storage.embeddings import get_embeddings_path
from janusdoc.storage.files import ensure_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocChunk:
    content: str
    embedding: list[float]


@dataclass(frozen=True)
class EmbeddedDoc:
    path: str
    chunks: list[DocChunk]


@dataclass(frozen=True)
class VectorIndex:
    """
    Whole-corpus index, rebuilt from scratch, never patched.
    model is the embedding model that produced every vector in here.
    """

    model: str
    generated_at: str
    documents: list[EmbeddedDoc] = field(default_factory=list)

    @property
    def chunk_count(self) -> int:
        return sum(len(d.chunks) for d in self.documents)

    @property
    def paths(self) -> list[str]:
        return [d.path for d in self.documents]

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "generatedAt": self.generated_at,
            "documents": [
                {
                    "path": d.path,
                    "chunks": [{"content": c.content, "embedding": c.embedding} for c in d.chunks],
                }
                for d in self.documents
            ],
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> VectorIndex:
        # missing keys raise KeyError on purpose, a broken file is fatal
        return cls(
            model=str(payload["model"]),
            generated_at=str(payload["generatedAt"]),
            documents=[
                EmbeddedDoc(
                    path=str(d["path"]),
                    chunks=[
                        DocChunk(
                            content=str(c["content"]),
                            embedding=[float(x) for x in c["embedding"]],
                        )
                        for c in d["chunks"]
                    ],
                )
                for d in payload["documents"]
            ],
        )


def _batched(iterable: Iterable[Any], batch_size: int) -> Iterator[list[Any]]:
    batch = []
    for x in iterable:
        batch.append(x)
        if len(batch) >= batch_size:
            yield batch
            batch = []

    if batch:
        yield batch


def build_index(
    docs: list[DocFile],
    embedder,
    *,
    model: str | None = None,
    chunk_size: int | None = None,
    overlap: int | None = None,
    batch_size: int | None = None,
) -> VectorIndex:
    """
    Chunk every doc, embed all chunks (batched), pair chunk <-> vector by position.

    embedder: anything with embed_many(texts) -> list of vectors (same order).
    Provider errors are not caught here.
    """
    chunk_size = chunk_size if chunk_size is not None else settings.CHUNK_SIZE_WORDS
    overlap = overlap if overlap is not None else settings.CHUNK_OVERLAP_WORDS
    batch_size = batch_size or settings.EMBEDDING_BATCH_SIZE
    if model is None:
        model = getattr(embedder, "model_name", settings.EMBEDDING_MODEL_NAME)

    validate_chunking(chunk_size, overlap)

    # (doc position, chunk text) in document order
    flat: list[tuple[int, str]] = []
    for i, doc in enumerate(docs):
        for piece in chunk_text(doc.content, chunk_size, overlap):
            flat.append((i, piece))

    vectors: list[list[float]] = []
    for batch in _batched(flat, batch_size):
        texts = [t for _, t in batch]
        emb = embedder.embed_many(texts)
        if len(emb) != len(texts):
            raise ValueError("INVALID_EMBEDDING_COUNT")
        vectors.extend([float(x) for x in v] for v in emb)

    per_doc: list[list[DocChunk]] = [[] for _ in docs]
    for (doc_pos, text), vec in zip(flat, vectors):
        per_doc[doc_pos].append(DocChunk(content=text, embedding=vec))

    index = VectorIndex(
        model=model,
        generated_at=datetime.now(timezone.utc).isoformat(),
        documents=[EmbeddedDoc(path=d.path, chunks=per_doc[i]) for i, d in enumerate(docs)],
    )
    logger.info(
        "built index model=%s docs=%d chunks=%d", model, len(index.documents), index.chunk_count
    )

    return index


def save_index(index: VectorIndex, project_dir: str | None = None) -> str:
    """
    Writes .janusdoc/embeddings.json (full rewrite).
    """
    p = get_embeddings_path(project_dir)
    ensure_dir(p.parent)

    # compact, embeddings make this file large
    p.write_text(json.dumps(index.to_dict(), ensure_ascii=False), encoding="utf-8")

    return str(p)


def load_index(project_dir: str | None = None) -> VectorIndex:
    p = get_embeddings_path(project_dir)
    if not p.exists():
        raise IndexNotFound(str(p))

    payload = json.loads(p.read_text(encoding="utf-8"))

    return VectorIndex.from_dict(payload)


def index_exists(project_dir: str | None = None) -> bool:
    return get_embeddings_path(project_dir).exists()
