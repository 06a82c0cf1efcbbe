from __future__ import annotations

import hashlib
import re
from typing import Collection

WS_RE = re.compile(r"\s+")


def normalize_query(q: str) -> str:
    q = (q or "").strip()
    q = WS_RE.sub(" ", q)

    return q


def sha256_hex(s: str) -> str:
    return hashlib.sha256((s or "").encode("utf-8")).hexdigest()


def qemb_key(model: str, query: str) -> str:
    """
    Query embedding key, model is part of the key so switching models
    never reuses a vector from another embedding space.
    """
    return f"qemb:{model}:{sha256_hex(normalize_query(query))}"


def retr_key(
    model: str,
    index_version: str,
    query: str,
    top_n: int,
    threshold: float,
    paths: Collection[str] | None = None,
) -> str:
    """
    index_version is the index generation timestamp,
    rebuilding the index invalidates every cached result.
    threshold goes in with repr() so nearby values never share an entry.
    paths is the set of docs a search was restricted to, "*" when unrestricted.
    """
    qn = normalize_query(query)
    scope = "*" if paths is None else sha256_hex("\n".join(sorted(paths)))

    return f"retr:{model}:{index_version}:{sha256_hex(qn)}:{top_n}:{threshold!r}:{scope}"
