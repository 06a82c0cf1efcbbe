import logging
import os
from contextlib import asynccontextmanager

import redis
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from janusdoc.api.routes.health import router as health_router
from janusdoc.api.routes.relevant_docs import router as relevant_docs_router
from janusdoc.api.routes.vectorstore import router as vectorstore_router
from janusdoc.core.config import settings
from janusdoc.core.logging import setup_logging
from janusdoc.services.cache.redis_cache import default_cache
from janusdoc.services.indexing.embedding_service import default_embedding_service

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize huggingface token
    if settings.HF_TOKEN:
        os.environ["HF_TOKEN"] = settings.HF_TOKEN
        os.environ["HUGGINGFACEHUB_API_TOKEN"] = settings.HF_TOKEN

    # Initialize embedding model singleton once (fail-soft, relevant-docs falls back to all docs)
    try:
        svc = default_embedding_service()
        svc.load()
        app.state.embedding_service = svc
        logger.info("Embedding service loaded: %s", svc.model_name)
    except Exception as e:
        app.state.embedding_service = None
        logger.exception("Embedding model load failed (service disabled): %s", e)

    # Redis is optional
    app.state.cache = None
    if settings.ENABLE_CACHE:
        try:
            cache = default_cache(settings.REDIS_URL)
            cache.client.ping()
            app.state.cache = cache
            logger.info("Cache connected: %s", settings.REDIS_URL)
        except redis.RedisError as e:
            logger.warning("Cache unavailable (disabled): %s", e)

    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.include_router(health_router)
app.include_router(vectorstore_router)
app.include_router(relevant_docs_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra={"path": request.url.path})

    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
