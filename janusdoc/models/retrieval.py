from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    query: str
    top_n: int | None = Field(default=None, ge=1)
    threshold: float | None = None


class SearchHit(BaseModel):
    path: str
    similarity: float
    text_snippet: str


class SearchResponse(BaseModel):
    query: str
    model: str
    top_n: int
    threshold: float
    hits: list[SearchHit]


class RelevantDocsRequest(BaseModel):
    summary: str
    top_n: int | None = Field(default=None, ge=1)
    threshold: float | None = None
    max_content_chars: int | None = Field(default=None, ge=1)
    silent: bool = False


class RelevantDoc(BaseModel):
    path: str
    content: str
    similarity: float | None = None


class RelevantDocsResponse(BaseModel):
    ranked: bool
    total_docs: int
    documents: list[RelevantDoc]
