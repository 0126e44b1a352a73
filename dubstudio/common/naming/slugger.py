# dubstudio/common/naming/slugger.py
from __future__ import annotations

import re
import time
import unicodedata
from typing import Optional

_slug_re = re.compile(r"[^a-z0-9]+")
_url_safe_re = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_identifier_ws_re = re.compile(r"\s+")
_identifier_drop_re = re.compile(r"[^a-z0-9_-]+")

# letters NFKD leaves without an ASCII base
_FOLD = str.maketrans({
    "ı": "i",
    "ß": "ss",
    "æ": "ae",
    "œ": "oe",
    "ø": "o",
    "đ": "d",
    "ð": "d",
    "ł": "l",
    "þ": "th",
})


def slugify(text: str, *, max_len: int = 64) -> str:
    """
    Deterministic, human-readable slug:
      - lowercases
      - folds letters like 'ı' and 'ß', then NFKD normalizes and strips to ASCII
      - collapse separators to single '-'
      - trim leading/trailing '-'
      - truncate to `max_len`
      - returns '' if nothing remains

    Examples:
      "Action & Adventure" -> "action-adventure"
      "  Funny__Name!! " -> "funny-name"
      "Çizgi Dünyası" -> "cizgi-dunyasi"
    """
    if text is None:
        return ""

    value = str(text).strip().lower().translate(_FOLD)
    value = unicodedata.normalize("NFKD", value)
    value = value.encode("ascii", "ignore").decode("ascii")
    value = _slug_re.sub("-", value).strip("-")

    if max_len > 0 and len(value) > max_len:
        value = value[:max_len].rstrip("-")

    return value


def is_url_safe_slug(value: str | None) -> bool:
    return bool(value) and _url_safe_re.match(value) is not None


def upload_identifier(
    seed: str | None,
    context: str,
    *,
    fallback_id: Optional[int] = None,
    now: Optional[float] = None,
) -> str:
    """
    Identifier sent alongside an image upload.

    The seed (usually the slug, else the title) is lowercased, whitespace
    becomes '-', and anything outside [a-z0-9_-] is dropped. When nothing is
    left we use the persisted project id, then a timestamp-based id.
    """
    ident = _identifier_ws_re.sub("-", (seed or "").strip().lower())
    ident = _identifier_drop_re.sub("", ident)
    if ident:
        return ident
    if fallback_id is not None:
        return str(fallback_id)
    millis = int((time.time() if now is None else now) * 1000)
    return f"new-{context}-{millis}"
