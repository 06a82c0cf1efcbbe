from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from janusdoc.core.config import settings
from janusdoc.core.errors import DocsDirectoryNotFound

TRUNCATED_MARKER = "\n\n[... truncated ...]"


@dataclass(frozen=True)
class DocFile:
    path: str  # relative to the docs directory, posix separators
    content: str


def is_doc_file(name: str) -> bool:
    return Path(name).suffix.lower() in settings.DOC_EXTENSIONS


def _skip_dir(name: str) -> bool:
    return name.startswith(".") or name in settings.SKIP_DIRS


def scan_docs_directory(docs_path: Path) -> list[DocFile]:
    """
    Recursively read every documentation file under docs_path.
    Hidden directories, node_modules and symlinked directories are skipped.
    Files that are not valid utf-8 are read with U+FFFD replacements.
    Sorted by path so the index is built in a stable order.
    """
    if not docs_path.is_dir():
        raise DocsDirectoryNotFound(str(docs_path))

    docs: list[DocFile] = []
    stack = [docs_path]

    while stack:
        current = stack.pop()
        for entry in current.iterdir():
            if entry.is_symlink() and entry.is_dir():
                continue
            if entry.is_dir():
                if not _skip_dir(entry.name):
                    stack.append(entry)
            elif entry.is_file() and is_doc_file(entry.name):
                docs.append(
                    DocFile(
                        path=entry.relative_to(docs_path).as_posix(),
                        content=entry.read_text(encoding="utf-8", errors="replace"),
                    )
                )

    return sorted(docs, key=lambda d: d.path)


def summarize_docs(docs: list[DocFile], max_content_length: int | None = None) -> list[DocFile]:
    """
    Truncate long docs so a batch of them fits in a downstream prompt.
    """
    limit = max_content_length or settings.DOC_SUMMARY_MAX_CHARS

    out: list[DocFile] = []
    for d in docs:
        if len(d.content) > limit:
            out.append(DocFile(path=d.path, content=d.content[:limit] + TRUNCATED_MARKER))
        else:
            out.append(d)

    return out
