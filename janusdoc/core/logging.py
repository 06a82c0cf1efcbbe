import logging
import sys

from janusdoc.core.config import settings

# model downloads + redis chatter drown out index/search logs
NOISY_LOGGERS: dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "urllib3": logging.WARNING,
    "filelock": logging.WARNING,
    "huggingface_hub": logging.WARNING,
    "transformers": logging.WARNING,
    "sentence_transformers": logging.INFO,
    "redis": logging.WARNING,
}


def setup_logging(level_name: str | None = None) -> None:
    level = getattr(logging, (level_name or settings.LOG_LEVEL).upper(), logging.INFO)

    for name, lvl in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(lvl)

    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
