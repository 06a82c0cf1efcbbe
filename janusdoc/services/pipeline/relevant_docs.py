"""
Relevant-docs pipeline.

Each stage takes the previous context and returns a bigger one, or None when
there is nothing left to do:

    load_project(RunRequest) -> ProjectContext
    scan_docs(ProjectContext) -> DocsContext | None        (empty corpus)
    rank_docs(DocsContext) -> RelevantDocsContext

rank_docs falls back to the whole (truncated) corpus when no index or no
embedding service is available; the result is then flagged ranked=False.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, Callable, Sequence

from janusdoc.core.config import settings
from janusdoc.core.errors import IndexNotFound
from janusdoc.models.config import JanusDocConfig
from janusdoc.services.indexing.vector_index import load_index
from janusdoc.services.retrieval.retriever import RetrieverService, SearchResult
from janusdoc.storage.docs import DocFile, scan_docs_directory, summarize_docs
from janusdoc.storage.project_config import load_config, resolve_docs_dir

logger = logging.getLogger(__name__)

Stage = Callable[[Any], Any]


@dataclass(frozen=True)
class RunOptions:
    silent: bool = False
    top_n: int | None = None
    threshold: float | None = None
    max_content_chars: int | None = None


@dataclass(frozen=True)
class RunRequest:
    project_dir: str
    summary: str
    options: RunOptions = field(default_factory=RunOptions)


@dataclass(frozen=True)
class ProjectContext(RunRequest):
    config: JanusDocConfig | None = None


@dataclass(frozen=True)
class DocsContext(ProjectContext):
    docs_dir: Path | None = None
    all_docs: list[DocFile] = field(default_factory=list)


@dataclass(frozen=True)
class RelevantDocsContext(DocsContext):
    relevant_docs: list[DocFile] = field(default_factory=list)
    results: list[SearchResult] = field(default_factory=list)
    ranked: bool = False


def report(options: RunOptions, message: str, *args: Any) -> None:
    # silent runs still leave a debug trail
    level = logging.DEBUG if options.silent else logging.INFO
    logger.log(level, message, *args)


def resolve_search_params(
    config: JanusDocConfig | None,
    top_n: int | None = None,
    threshold: float | None = None,
) -> tuple[int, float]:
    """
    request value > project config (.janusdoc.json search) > settings default
    """
    search_cfg = config.search if config is not None else None

    if top_n is None and search_cfg is not None:
        top_n = search_cfg.top_n
    if threshold is None and search_cfg is not None:
        threshold = search_cfg.threshold

    top_n = settings.DEFAULT_TOP_N if top_n is None else top_n
    threshold = settings.DEFAULT_THRESHOLD if threshold is None else threshold

    return min(top_n, settings.MAX_TOP_N), threshold


def run_stages(initial: Any, stages: Sequence[Stage]) -> Any | None:
    ctx = initial
    for stage in stages:
        ctx = stage(ctx)
        if ctx is None:
            return None

    return ctx


def load_project(req: RunRequest) -> ProjectContext:
    config = load_config(req.project_dir)
    report(req.options, "docs path: %s", config.docs_path)

    return ProjectContext(
        project_dir=req.project_dir,
        summary=req.summary,
        options=req.options,
        config=config,
    )


def scan_docs(ctx: ProjectContext) -> DocsContext | None:
    docs_dir = resolve_docs_dir(ctx.config, ctx.project_dir)
    docs = scan_docs_directory(docs_dir)
    report(ctx.options, "found %d documentation file(s)", len(docs))

    if not docs:
        report(ctx.options, "no documentation files found, nothing to analyze")
        return None

    return DocsContext(
        project_dir=ctx.project_dir,
        summary=ctx.summary,
        options=ctx.options,
        config=ctx.config,
        docs_dir=docs_dir,
        all_docs=docs,
    )


def _unranked(ctx: DocsContext) -> RelevantDocsContext:
    return RelevantDocsContext(
        project_dir=ctx.project_dir,
        summary=ctx.summary,
        options=ctx.options,
        config=ctx.config,
        docs_dir=ctx.docs_dir,
        all_docs=ctx.all_docs,
        relevant_docs=summarize_docs(ctx.all_docs, ctx.options.max_content_chars),
        results=[],
        ranked=False,
    )


def rank_docs(ctx: DocsContext, retriever: RetrieverService | None) -> RelevantDocsContext:
    if retriever is None:
        report(ctx.options, "semantic search disabled (no embedding service), using all docs")
        return _unranked(ctx)

    try:
        index = load_index(ctx.project_dir)
    except IndexNotFound:
        report(ctx.options, "no embeddings index, using all docs")
        return _unranked(ctx)

    top_n, threshold = resolve_search_params(
        ctx.config, ctx.options.top_n, ctx.options.threshold
    )
    # the index can be older than the docs dir, only rank paths that still exist
    by_path = {d.path: d for d in ctx.all_docs}
    results = retriever.search(
        ctx.summary, index, top_n=top_n, threshold=threshold, paths=by_path.keys()
    )
    relevant = summarize_docs([by_path[r.path] for r in results], ctx.options.max_content_chars)

    report(ctx.options, "found %d relevant doc(s) via semantic search", len(relevant))

    return RelevantDocsContext(
        project_dir=ctx.project_dir,
        summary=ctx.summary,
        options=ctx.options,
        config=ctx.config,
        docs_dir=ctx.docs_dir,
        all_docs=ctx.all_docs,
        relevant_docs=relevant,
        results=results,
        ranked=True,
    )


def find_relevant_docs(
    req: RunRequest, retriever: RetrieverService | None
) -> RelevantDocsContext | None:
    return run_stages(req, [load_project, scan_docs, partial(rank_docs, retriever=retriever)])
