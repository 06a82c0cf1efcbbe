import logging
import time

from fastapi import APIRouter, HTTPException, Request

from janusdoc.core.config import settings
from janusdoc.core.errors import (
    ConfigNotFound,
    DimensionMismatch,
    DocsDirectoryNotFound,
    ModelMismatch,
)
from janusdoc.models.retrieval import RelevantDoc, RelevantDocsRequest, RelevantDocsResponse
from janusdoc.services.pipeline.relevant_docs import RunOptions, RunRequest, find_relevant_docs
from janusdoc.services.retrieval.retriever import RetrieverService

router = APIRouter(tags=["retrieval"])
logger = logging.getLogger(__name__)


@router.post("/relevant-docs", response_model=RelevantDocsResponse)
def relevant_docs(request: Request, body: RelevantDocsRequest) -> RelevantDocsResponse:
    """
    Docs worth showing to the edit-drafting step for a code change summary.

    ranked=False means semantic search was not possible (no index or no
    embedding model) and every doc is returned instead.
    """
    t0 = time.perf_counter()

    summary = (body.summary or "").strip()
    if not summary:
        raise HTTPException(status_code=400, detail="Summary must not be empty.")
    if len(summary) > settings.MAX_QUERY_CHARS:
        raise HTTPException(status_code=400, detail="Summary too long.")

    svc = getattr(request.app.state, "embedding_service", None)
    retriever = None
    if svc is not None:
        retriever = RetrieverService(
            svc, cache=getattr(request.app.state, "cache", None), project_dir=settings.PROJECT_DIR
        )

    req = RunRequest(
        project_dir=settings.PROJECT_DIR,
        summary=summary,
        options=RunOptions(
            silent=body.silent,
            top_n=body.top_n,
            threshold=body.threshold,
            max_content_chars=body.max_content_chars,
        ),
    )

    try:
        ctx = find_relevant_docs(req, retriever)
    except (ConfigNotFound, DocsDirectoryNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (ModelMismatch, DimensionMismatch) as e:
        raise HTTPException(status_code=409, detail=str(e))

    if ctx is None:
        return RelevantDocsResponse(ranked=False, total_docs=0, documents=[])

    scores = {r.path: r.similarity for r in ctx.results}
    documents = [
        RelevantDoc(path=d.path, content=d.content, similarity=scores.get(d.path))
        for d in ctx.relevant_docs
    ]

    dt = (time.perf_counter() - t0) * 1000
    logger.info(
        "relevant-docs ranked=%d docs=%d/%d latency_ms=%.2f",
        1 if ctx.ranked else 0,
        len(documents),
        len(ctx.all_docs),
        dt,
    )

    return RelevantDocsResponse(ranked=ctx.ranked, total_docs=len(ctx.all_docs), documents=documents)
