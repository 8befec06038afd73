# mentor_matching/matching/tags.py
from __future__ import annotations

import json
from typing import Iterable, List, Sequence

from ..config import TAG_SEPARATOR


def normalize_tag(tag: str) -> str:
    return str(tag).strip().lower()


def tags_match(skill: str, need: str) -> bool:
    """
    Case-insensitive substring overlap in either direction, so
    "Fundraising" matches "fundraising strategy" and vice versa.
    """
    s = normalize_tag(skill)
    n = normalize_tag(need)
    if not s or not n:
        return False
    return s in n or n in s


def matched_needs(skills: Sequence[str], needs: Sequence[str]) -> List[str]:
    """Distinct needs (first occurrence kept) covered by at least one skill."""
    seen = set()
    out: List[str] = []
    for need in needs:
        key = normalize_tag(need)
        if not key or key in seen:
            continue
        if any(tags_match(s, need) for s in skills):
            seen.add(key)
            out.append(need)
    return out


def count_distinct_needs(needs: Sequence[str]) -> int:
    # blank needs can never be matched, so they are not needs at all
    return len({normalize_tag(n) for n in needs} - {""})


def matching_skills(skills: Sequence[str], needs: Sequence[str]) -> List[str]:
    """
    Mentor skills that match at least one need, deduplicated
    case-insensitively, in the mentor's own order.
    """
    seen = set()
    out: List[str] = []
    for skill in skills:
        key = normalize_tag(skill)
        if key in seen:
            continue
        if any(tags_match(skill, n) for n in needs):
            seen.add(key)
            out.append(skill)
    return out


def parse_tags(raw) -> List[str]:
    """
    Accepts a list of tags, a JSON array string (the stored format) or a
    separator-delimited string. Blank entries are dropped.
    """
    if raw is None:
        return []
    if isinstance(raw, float) and raw != raw:  # NaN from pandas
        return []
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return []
        if text.startswith("["):
            items: Iterable = json.loads(text)
        else:
            items = text.split(TAG_SEPARATOR)
    else:
        items = raw
    return [str(t).strip() for t in items if str(t).strip()]
