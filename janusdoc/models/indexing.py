from pydantic import BaseModel


class BuildIndexRequest(BaseModel):
    docs_path: str | None = None


class BuildIndexResponse(BaseModel):
    status: str
    docs_path: str
    model: str | None = None
    generated_at: str | None = None
    document_count: int
    chunk_count: int
    index_path: str | None = None


class IndexInfoResponse(BaseModel):
    model: str
    generated_at: str
    document_count: int
    chunk_count: int
    paths: list[str]
    index_path: str
