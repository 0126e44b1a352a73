# dubstudio/common/strings/splitters.py
from __future__ import annotations

from typing import Iterable, List


def csv_to_list(v: str | Iterable[str] | None, *, upper: bool = False) -> List[str]:
    """
    Env-style list values ("a, b,c" or an already-split sequence) as a clean
    list: items stripped, blanks dropped, repeats collapsed in first-seen order.
    """
    if v is None:
        return []
    items = str(v).split(",") if isinstance(v, str) else v
    out: List[str] = []
    for item in items:
        s = str(item).strip() if item is not None else ""
        if upper:
            s = s.upper()
        if s and s not in out:
            out.append(s)
    return out
