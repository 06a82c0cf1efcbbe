from pathlib import Path

from janusdoc.core.config import settings
from janusdoc.storage.files import get_config_dir


def get_embeddings_path(project_dir: str | None = None) -> Path:
    return get_config_dir(project_dir) / settings.EMBEDDINGS_FILE_NAME
