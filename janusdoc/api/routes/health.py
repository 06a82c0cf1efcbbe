from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request) -> dict:
    return {
        "status": "ok",
        "embedding_service": getattr(request.app.state, "embedding_service", None) is not None,
        "cache": getattr(request.app.state, "cache", None) is not None,
    }
