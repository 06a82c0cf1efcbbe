from pathlib import Path

import pytest

from janusdoc.core.errors import DocsDirectoryNotFound
from janusdoc.storage.docs import DocFile, scan_docs_directory, summarize_docs


def write(p: Path, text: str = "content") -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


def test_scan_finds_doc_files_recursively(tmp_path: Path):
    write(tmp_path / "index.md", "# Home")
    write(tmp_path / "guide" / "setup.MDX", "setup")
    write(tmp_path / "guide" / "deep" / "notes.rst", "notes")
    write(tmp_path / "changelog.txt", "changes")
    write(tmp_path / "script.py", "print()")
    write(tmp_path / "image.png", "png")

    docs = scan_docs_directory(tmp_path)

    assert [d.path for d in docs] == [
        "changelog.txt",
        "guide/deep/notes.rst",
        "guide/setup.MDX",
        "index.md",
    ]
    assert docs[-1].content == "# Home"


def test_scan_skips_hidden_and_node_modules(tmp_path: Path):
    write(tmp_path / ".vitepress" / "config.md")
    write(tmp_path / "node_modules" / "pkg" / "README.md")
    write(tmp_path / "real.md")

    assert [d.path for d in scan_docs_directory(tmp_path)] == ["real.md"]


def test_scan_empty_directory(tmp_path: Path):
    assert scan_docs_directory(tmp_path) == []


def test_scan_missing_directory(tmp_path: Path):
    with pytest.raises(DocsDirectoryNotFound, match="Documentation directory not found"):
        scan_docs_directory(tmp_path / "nope")


def test_summarize_truncates_long_docs_only():
    docs = [DocFile("short.md", "tiny"), DocFile("long.md", "x" * 50)]

    out = summarize_docs(docs, max_content_length=10)

    assert out[0] == docs[0]
    assert out[1].content == "x" * 10 + "\n\n[... truncated ...]"
    assert docs[1].content == "x" * 50


def test_summarize_default_limit():
    doc = DocFile("a.md", "y" * 2500)
    assert summarize_docs([doc])[0].content.startswith("y" * 2000 + "\n\n[...")


def test_scan_reads_non_utf8_files_with_replacement(tmp_path: Path):
    write(tmp_path / "ok.md", "fine")
    (tmp_path / "legacy.txt").write_bytes(b"caf\xe9 notes")

    docs = scan_docs_directory(tmp_path)

    assert [d.path for d in docs] == ["legacy.txt", "ok.md"]
    assert docs[0].content == "caf\ufffd notes"


def test_scan_does_not_follow_symlinked_directories(tmp_path: Path):
    docs_dir = tmp_path / "docs"
    write(docs_dir / "a.md", "a")
    (docs_dir / "loop").symlink_to(docs_dir, target_is_directory=True)
    write(tmp_path / "elsewhere" / "b.md", "b")
    (docs_dir / "linked").symlink_to(tmp_path / "elsewhere", target_is_directory=True)

    assert [d.path for d in scan_docs_directory(docs_dir)] == ["a.md"]
