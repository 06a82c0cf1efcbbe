"""
Error taxonomy.

Not-found errors subclass FileNotFoundError and data errors subclass ValueError,
so callers that only care about the broad category can keep catching builtins.
"""


class IndexNotFound(FileNotFoundError):
    """No persisted embeddings index for the project."""

    def __init__(self, path: str):
        super().__init__(f"Embeddings index not found at {path}. Build the index first.")
        self.path = path


class ConfigNotFound(FileNotFoundError):
    """No .janusdoc.json in the project directory."""

    def __init__(self, path: str):
        super().__init__(f"Config file not found at {path}. Initialize the project first.")
        self.path = path


class DocsDirectoryNotFound(FileNotFoundError):
    def __init__(self, path: str):
        super().__init__(f"Documentation directory not found: {path}")
        self.path = path


class DimensionMismatch(ValueError):
    """Vectors of different length were compared."""

    def __init__(self, left: int, right: int):
        super().__init__(f"Vectors must have the same length (got {left} and {right})")
        self.left = left
        self.right = right


class ModelMismatch(ValueError):
    """Index was built with a different embedding model than the query embedder."""

    def __init__(self, index_model: str, query_model: str):
        super().__init__(
            f"Index was built with '{index_model}' but queries use '{query_model}'. "
            "Rebuild the index."
        )
        self.index_model = index_model
        self.query_model = query_model
