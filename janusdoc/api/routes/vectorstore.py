import logging

from fastapi import APIRouter, HTTPException, Query, Request

from janusdoc.core.config import settings
from janusdoc.core.errors import (
    DimensionMismatch,
    DocsDirectoryNotFound,
    IndexNotFound,
    ModelMismatch,
)
from janusdoc.models.config import JanusDocConfig
from janusdoc.models.indexing import BuildIndexRequest, BuildIndexResponse, IndexInfoResponse
from janusdoc.models.retrieval import SearchHit, SearchRequest, SearchResponse
from janusdoc.services.indexing.vector_index import build_index, index_exists, load_index, save_index
from janusdoc.services.pipeline.relevant_docs import resolve_search_params
from janusdoc.services.retrieval.retriever import RetrieverService
from janusdoc.storage.docs import scan_docs_directory
from janusdoc.storage.embeddings import get_embeddings_path
from janusdoc.storage.project_config import (
    config_exists,
    find_docs_directory,
    load_config,
    resolve_docs_dir,
    save_config,
)

router = APIRouter(tags=["indexing"])
logger = logging.getLogger(__name__)

SNIPPET_CHARS = 400


def _resolve_config(docs_path: str | None) -> JanusDocConfig:
    """
    docs_path given -> (re)write .janusdoc.json, keeping existing search settings
    no config yet -> look for docs/, documentation/ or doc/ and save that
    otherwise -> read it
    """
    project_dir = settings.PROJECT_DIR

    if not docs_path and not config_exists(project_dir):
        docs_path = find_docs_directory(project_dir)
        if docs_path is None:
            raise HTTPException(
                status_code=404,
                detail="Config not found and no docs directory detected. Pass docs_path.",
            )
        logger.info("detected docs directory: %s", docs_path)

    if docs_path:
        docs_path = docs_path.strip()
        if config_exists(project_dir):
            config = load_config(project_dir).model_copy(update={"docs_path": docs_path})
        else:
            config = JanusDocConfig(docs_path=docs_path)
        save_config(config, project_dir)
        logger.info("saved config docs_path=%s", docs_path)
        return config

    return load_config(project_dir)


@router.post("/index", response_model=BuildIndexResponse)
def build_index_route(
    request: Request,
    body: BuildIndexRequest,
    force: bool = Query(False),
) -> BuildIndexResponse:
    """
    Scan the docs directory, chunk + embed everything, write .janusdoc/embeddings.json
    Always a full rebuild (force=true), never an incremental patch.
    """
    project_dir = settings.PROJECT_DIR
    config = _resolve_config(body.docs_path)

    if index_exists(project_dir) and not force:
        index = load_index(project_dir)

        return BuildIndexResponse(
            status="already_indexed",
            docs_path=config.docs_path,
            model=index.model,
            generated_at=index.generated_at,
            document_count=len(index.documents),
            chunk_count=index.chunk_count,
            index_path=str(get_embeddings_path(project_dir)),
        )

    # use singleton from app.state (which is loaded once at startup)
    svc = getattr(request.app.state, "embedding_service", None)
    if svc is None:
        raise HTTPException(status_code=503, detail="Embedding service unavailable.")

    try:
        docs = scan_docs_directory(resolve_docs_dir(config, project_dir))
    except DocsDirectoryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not docs:
        return BuildIndexResponse(
            status="no_documents",
            docs_path=config.docs_path,
            document_count=0,
            chunk_count=0,
        )

    try:
        index = build_index(docs, svc)
    except ValueError:
        # chunking params are validated with settings, so this is the provider misbehaving
        logger.exception("index build failed docs=%d model=%s", len(docs), svc.model_name)
        raise HTTPException(status_code=502, detail="Embedding provider returned invalid output.")

    index_path = save_index(index, project_dir)

    return BuildIndexResponse(
        status="indexed",
        docs_path=config.docs_path,
        model=index.model,
        generated_at=index.generated_at,
        document_count=len(index.documents),
        chunk_count=index.chunk_count,
        index_path=index_path,
    )


@router.get("/index", response_model=IndexInfoResponse)
def index_info() -> IndexInfoResponse:
    project_dir = settings.PROJECT_DIR

    try:
        index = load_index(project_dir)
    except IndexNotFound:
        raise HTTPException(status_code=404, detail="Embeddings index not found. Run /index first.")

    return IndexInfoResponse(
        model=index.model,
        generated_at=index.generated_at,
        document_count=len(index.documents),
        chunk_count=index.chunk_count,
        paths=index.paths,
        index_path=str(get_embeddings_path(project_dir)),
    )


@router.post("/search", response_model=SearchResponse)
def search_docs(request: Request, body: SearchRequest) -> SearchResponse:
    """
    Top-n docs (best chunk each) for a natural language query
    """
    query = (body.query or "").strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query must not be empty.")
    if len(query) > settings.MAX_QUERY_CHARS:
        raise HTTPException(status_code=400, detail="Query too long.")

    project_dir = settings.PROJECT_DIR

    svc = getattr(request.app.state, "embedding_service", None)
    if svc is None:
        raise HTTPException(status_code=503, detail="Embedding service unavailable.")

    config = load_config(project_dir) if config_exists(project_dir) else None
    top_n, threshold = resolve_search_params(config, body.top_n, body.threshold)

    try:
        index = load_index(project_dir)
    except IndexNotFound:
        raise HTTPException(status_code=404, detail="Embeddings index not found. Run /index first.")

    retriever = RetrieverService(
        svc, cache=getattr(request.app.state, "cache", None), project_dir=project_dir
    )

    try:
        hits = retriever.search(query, index, top_n=top_n, threshold=threshold)
    except (ModelMismatch, DimensionMismatch) as e:
        raise HTTPException(status_code=409, detail=str(e))

    return SearchResponse(
        query=query,
        model=index.model,
        top_n=top_n,
        threshold=threshold,
        hits=[
            SearchHit(path=h.path, similarity=h.similarity, text_snippet=h.content[:SNIPPET_CHARS])
            for h in hits
        ],
    )
