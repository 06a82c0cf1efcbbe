from pathlib import Path

from janusdoc.core.config import settings


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def get_project_root(project_dir: str | None = None) -> Path:
    return Path(project_dir if project_dir is not None else settings.PROJECT_DIR)


def get_config_dir(project_dir: str | None = None) -> Path:
    return get_project_root(project_dir) / settings.CONFIG_DIR_NAME


def directory_exists(path: Path) -> bool:
    return path.is_dir()
