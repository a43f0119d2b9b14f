from __future__ import annotations

import math
import re
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from core.traits.lexicon import DEFAULT_CONFIG, TRAIT_NAMES, EngineConfig, ScoringThresholds
from core.traits.models import Document


HEADING_RE = re.compile(r"^[ \t]{0,3}#{1,6}[ \t]+(.+)$", re.MULTILINE)
BOLD_RE = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
LIST_ITEM_RE = re.compile(r"^[ \t]*(?:[-*+]|\d+[.)])[ \t]+(.+)$", re.MULTILINE)


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    """Halves round up (10.5 -> 11), not to the even neighbour like round()."""
    return int(math.floor(x + 0.5))


@lru_cache(maxsize=1024)
def keyword_pattern(keyword: str) -> re.Pattern:
    """Whole-word, case-insensitive pattern. Lookarounds instead of \\b so
    tokens ending in punctuation (``next.js``) still match."""
    return re.compile(r"(?<!\w)" + re.escape(keyword) + r"(?!\w)", re.IGNORECASE)


def count_keyword(text: str, keyword: str) -> int:
    return len(keyword_pattern(keyword).findall(text))


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword_pattern(k).search(text) for k in keywords)


def build_documents(files: Mapping[str, str], config: EngineConfig = DEFAULT_CONFIG) -> List[Document]:
    return [
        Document(role=role, content=content or "", weight=config.document_weight(role))
        for role, content in files.items()
    ]


# -----------------------------
# Raw scorer
# -----------------------------

def _lexical_score(content: str, keywords: Sequence[str]) -> int:
    return sum(count_keyword(content, k) for k in keywords)


def _structural_score(content: str, top_keywords: Sequence[str], t: ScoringThresholds) -> float:
    headings = sum(1 for m in HEADING_RE.finditer(content) if contains_any(m.group(1), top_keywords))
    bold = sum(
        1 for m in BOLD_RE.finditer(content)
        if contains_any(m.group(1) or m.group(2) or "", top_keywords)
    )
    items = sum(1 for m in LIST_ITEM_RE.finditer(content) if contains_any(m.group(1), top_keywords))

    return (
        headings * t.heading_multiplier
        + bold * t.bold_multiplier
        + items * t.list_multiplier
    )


def compute_raw_score(
    trait: str,
    documents: Sequence[Document],
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """
    Unbounded lexical score for one trait.

    Per document: keyword hits x base multiplier x document weight, plus
    heading / bold / list-item bonuses for lines mentioning a top keyword.
    The document sum is scaled by the trait's category weight.
    """
    kc = config.keywords_for(trait)
    t = config.thresholds

    total = 0.0
    for doc in documents:
        if not doc.content or not doc.content.strip():
            continue
        hits = _lexical_score(doc.content, kc.keywords)
        total += hits * t.base_multiplier * doc.weight
        total += _structural_score(doc.content, kc.top_keywords, t) * doc.weight

    return total * kc.weight


# -----------------------------
# Normalizer
# -----------------------------

def length_factor(total_chars: int, config: EngineConfig = DEFAULT_CONFIG) -> float:
    t = config.thresholds
    return min(t.max_length_factor, max(0, total_chars) / t.length_divisor)


def normalize_score(raw_score: float, total_chars: int, config: EngineConfig = DEFAULT_CONFIG) -> int:
    # log curve: repeating a keyword yields diminishing returns
    t = config.thresholds
    lf = length_factor(total_chars, config)
    value = round_half_up(t.log_scale * math.log10(max(0.0, raw_score) + 1) * lf)
    return int(clamp(value, t.normalized_floor, t.normalized_ceiling))


def compute_confidence(total_chars: int, config: EngineConfig = DEFAULT_CONFIG) -> int:
    lf = length_factor(total_chars, config)
    return int(clamp(round_half_up(lf * config.thresholds.confidence_scale), 0, 100))


def score_documents(
    documents: Sequence[Document],
    config: EngineConfig = DEFAULT_CONFIG,
) -> Tuple[Dict[str, float], Dict[str, int], int]:
    """Returns (raw scores, normalized traits, confidence)."""
    total_chars = sum(len(d.content) for d in documents)

    raw: Dict[str, float] = {}
    normalized: Dict[str, int] = {}
    for trait in TRAIT_NAMES:
        raw[trait] = compute_raw_score(trait, documents, config)
        normalized[trait] = normalize_score(raw[trait], total_chars, config)

    return raw, normalized, compute_confidence(total_chars, config)
