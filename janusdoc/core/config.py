from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "JanusDoc API"
    LOG_LEVEL: str = "INFO"

    # Project layout (.janusdoc.json + .janusdoc/ live in PROJECT_DIR)
    PROJECT_DIR: str = "."
    CONFIG_FILE_NAME: str = ".janusdoc.json"
    CONFIG_DIR_NAME: str = ".janusdoc"
    EMBEDDINGS_FILE_NAME: str = "embeddings.json"
    DEFAULT_DOCS_DIRS: tuple[str, ...] = ("docs", "documentation", "doc")

    # Docs scanning
    DOC_EXTENSIONS: tuple[str, ...] = (".md", ".mdx", ".rst", ".txt")
    SKIP_DIRS: tuple[str, ...] = ("node_modules",)
    DOC_SUMMARY_MAX_CHARS: int = 2000

    # Chunking (words are a proxy for tokens)
    CHUNK_SIZE_WORDS: int = 500
    CHUNK_OVERLAP_WORDS: int = 50

    # Embedding
    EMBEDDING_MODEL_NAME: str = "sentence-transformers/all-MiniLM-L6-v2"
    EMBEDDING_BATCH_SIZE: int = 64
    EMBEDDING_NORMALIZE: bool = True

    # Retrieval
    DEFAULT_TOP_N: int = 5
    DEFAULT_THRESHOLD: float = 0.5
    MAX_TOP_N: int = 50
    ENFORCE_MODEL_MATCH: bool = True

    MAX_QUERY_CHARS: int = 4000

    HF_TOKEN: str | None = None

    # Redis / Cache
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_SECONDS: int = 3600
    ENABLE_CACHE: bool = True

    @model_validator(mode="after")
    def _check_chunking(self) -> "Settings":
        # sliding window never advances otherwise
        if self.CHUNK_OVERLAP_WORDS >= self.CHUNK_SIZE_WORDS:
            raise ValueError("CHUNK_OVERLAP_WORDS must be smaller than CHUNK_SIZE_WORDS")

        return self


settings = Settings()
