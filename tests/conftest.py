from pathlib import Path

import pytest

from janusdoc.core.config import settings


@pytest.fixture()
def temp_project_dir(tmp_path: Path):
    """
    Uses a temporary PROJECT_DIR for tests and restores the original
    value after execution.
    """
    old = settings.PROJECT_DIR
    settings.PROJECT_DIR = str(tmp_path)
    (tmp_path / "docs").mkdir(parents=True, exist_ok=True)
    yield tmp_path
    settings.PROJECT_DIR = old


@pytest.fixture(autouse=True)
def restore_settings_flags():
    """
    Tests flip ENABLE_CACHE / ENFORCE_MODEL_MATCH, always put them back.
    """
    old_cache = settings.ENABLE_CACHE
    old_enforce = settings.ENFORCE_MODEL_MATCH
    yield
    settings.ENABLE_CACHE = old_cache
    settings.ENFORCE_MODEL_MATCH = old_enforce
