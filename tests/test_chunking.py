import pytest

from janusdoc.services.indexing.chunking import chunk_text


def test_short_text_is_single_unmodified_chunk():
    text = "Hello   world\nthis is a short text "
    chunks = chunk_text(text, 100, 10)

    assert chunks == [text]


def test_text_exactly_chunk_size_is_not_split():
    text = " ".join(f"w{i}" for i in range(50))
    assert chunk_text(text, 50, 10) == [text]


def test_empty_text_is_one_chunk():
    assert chunk_text("", 10, 2) == [""]


def test_long_text_splits_with_exact_overlap():
    words = [f"w{i}" for i in range(150)]
    chunks = chunk_text(" ".join(words), 50, 10)

    assert len(chunks) >= 2
    split = [c.split() for c in chunks]
    for prev, nxt in zip(split, split[1:]):
        assert prev[-10:] == nxt[:10]

    # windows advance by chunk_size - overlap
    assert split[0] == words[0:50]
    assert split[1] == words[40:90]
    assert split[2] == words[80:130]
    assert split[3] == words[120:150]
    assert len(chunks) == 4


def test_final_chunk_is_clipped_not_padded():
    words = [f"w{i}" for i in range(55)]
    chunks = chunk_text(" ".join(words), 50, 10)

    assert len(chunks) == 2
    assert chunks[1].split() == words[40:55]


def test_long_text_is_rejoined_with_single_spaces():
    text = "a\n\nb  c\td " * 20  # 80 words
    chunks = chunk_text(text, 30, 5)

    for c in chunks:
        assert "  " not in c
        assert "\n" not in c


def test_zero_overlap():
    words = [f"w{i}" for i in range(20)]
    chunks = chunk_text(" ".join(words), 10, 0)

    assert [c.split() for c in chunks] == [words[0:10], words[10:20]]


def test_uses_settings_defaults(monkeypatch):
    from janusdoc.core.config import settings

    monkeypatch.setattr(settings, "CHUNK_SIZE_WORDS", 4)
    monkeypatch.setattr(settings, "CHUNK_OVERLAP_WORDS", 1)

    chunks = chunk_text("a b c d e f g")
    assert chunks == ["a b c d", "d e f g"]


@pytest.mark.parametrize("size,overlap", [(10, 10), (10, 15), (0, 0), (10, -1)])
def test_invalid_parameters_are_rejected(size, overlap):
    with pytest.raises(ValueError):
        chunk_text("a b c", size, overlap)
