from pydantic import BaseModel, ConfigDict, Field


class SearchConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    top_n: int | None = Field(default=None, alias="topN", ge=1)
    threshold: float | None = None


class JanusDocConfig(BaseModel):
    """
    Contents of .janusdoc.json

    Example:
        {"docsPath": "docs", "search": {"topN": 15, "threshold": 0.15}}
    """

    model_config = ConfigDict(populate_by_name=True)

    docs_path: str = Field(alias="docsPath", min_length=1)
    search: SearchConfig = Field(default_factory=SearchConfig)
