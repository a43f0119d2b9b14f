from __future__ import annotations

import hashlib
from typing import Mapping, Sequence

from core.traits.models import Document


EXCERPT_ORDER = ("soul", "identity", "tools")


def content_excerpt(documents: Sequence[Document], limit: int) -> str:
    by_role = {d.role: d.content for d in documents}
    ordered = [r for r in EXCERPT_ORDER if r in by_role]
    ordered += sorted(r for r in by_role if r not in EXCERPT_ORDER)
    return "\n".join(by_role[r][:limit] for r in ordered)


def generate_fingerprint(traits: Mapping[str, int], documents: Sequence[Document], excerpt_chars: int = 500) -> str:
    """sha256 over ``k:v|...`` (keys sorted) and a bounded excerpt of each document."""
    vector = "|".join(f"{k}:{traits[k]}" for k in sorted(traits))
    data = vector + "\n" + content_excerpt(documents, excerpt_chars)
    return hashlib.sha256(data.encode("utf-8")).hexdigest()
