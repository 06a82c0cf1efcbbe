from __future__ import annotations

from pathlib import Path

from janusdoc.core.config import settings
from janusdoc.core.errors import ConfigNotFound
from janusdoc.models.config import JanusDocConfig
from janusdoc.storage.files import directory_exists, get_project_root


def get_config_path(project_dir: str | None = None) -> Path:
    return get_project_root(project_dir) / settings.CONFIG_FILE_NAME


def config_exists(project_dir: str | None = None) -> bool:
    return get_config_path(project_dir).exists()


def load_config(project_dir: str | None = None) -> JanusDocConfig:
    """
    Reads .janusdoc.json
    Invalid json / missing docsPath propagate as pydantic ValidationError.
    """
    p = get_config_path(project_dir)
    if not p.exists():
        raise ConfigNotFound(str(p))

    return JanusDocConfig.model_validate_json(p.read_text(encoding="utf-8"))


def save_config(config: JanusDocConfig, project_dir: str | None = None) -> str:
    p = get_config_path(project_dir)
    payload = config.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    p.write_text(payload + "\n", encoding="utf-8")

    return str(p)


def resolve_docs_dir(config: JanusDocConfig, project_dir: str | None = None) -> Path:
    # "./docs" and "docs" are the same thing
    docs_path = config.docs_path
    if docs_path.startswith("./"):
        docs_path = docs_path[2:]

    return get_project_root(project_dir) / docs_path


def find_docs_directory(project_dir: str | None = None) -> str | None:
    """
    First of the usual docs directories that exists, relative to the project.
    """
    root = get_project_root(project_dir)
    for name in settings.DEFAULT_DOCS_DIRS:
        if directory_exists(root / name):
            return name

    return None
