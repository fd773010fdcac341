from __future__ import annotations
import hashlib


def url_hash(url: str, length: int = 12) -> str:
    raw = url.strip().lower()
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:length]


def job_id(prefix: str, url: str, native_id: str | None = None) -> str:
    native = (native_id or "").strip()
    return f"{prefix}-{native or url_hash(url)}"
