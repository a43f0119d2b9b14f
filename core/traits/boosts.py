from __future__ import annotations

import re
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from core.traits.lexicon import DEFAULT_CONFIG, DeltaTable, EngineConfig
from core.traits.models import BoostMatch, Document
from core.traits.scoring import keyword_pattern, round_half_up


_TOKEN_SPLIT_RE = re.compile(r"[^\w]+|_")


def apply_deltas(
    traits: Mapping[str, int],
    deltas: Iterable[Tuple[Mapping[str, float], float]],
    ceiling: int,
) -> Dict[str, int]:
    """
    Shared by role, tool and capability boosts.

    Every (delta, scale) pair is accumulated first; each touched trait is
    then rounded and capped at ``ceiling``. A boost never lowers a trait.
    """
    accum: Dict[str, float] = defaultdict(float)
    for delta, scale in deltas:
        for trait, amount in delta.items():
            accum[trait] += float(amount) * scale

    out = dict(traits)
    for trait, amount in accum.items():
        if trait not in out:
            continue
        current = out[trait]
        boosted = min(ceiling, round_half_up(current + amount))
        out[trait] = max(current, boosted)
    return out


def detect_tokens(text: str, table: DeltaTable) -> List[str]:
    """Tokens of ``table`` present in ``text``. Presence only: ten mentions count once."""
    lowered = text.lower()
    return [token for token in table if keyword_pattern(token).search(lowered)]


# -----------------------------
# Contextual booster
# -----------------------------

def apply_contextual_boosts(
    traits: Mapping[str, int],
    documents: Sequence[Document],
    config: EngineConfig = DEFAULT_CONFIG,
) -> Tuple[Dict[str, int], List[BoostMatch]]:
    combined = "\n".join(d.content for d in documents)

    matches: List[BoostMatch] = []
    deltas: List[Tuple[Mapping[str, float], float]] = []

    for token in detect_tokens(combined, config.role_boosts):
        matches.append(BoostMatch(kind="role", token=token, pattern=token))
        deltas.append((config.role_boosts[token], 1.0))

    for token in detect_tokens(combined, config.tool_boosts):
        matches.append(BoostMatch(kind="tool", token=token, pattern=token))
        deltas.append((config.tool_boosts[token], 1.0))

    boosted = apply_deltas(traits, deltas, config.thresholds.boost_ceiling)
    return boosted, matches


# -----------------------------
# Capability bonus
# -----------------------------

def _tokens(identifier: str) -> List[str]:
    return [t for t in _TOKEN_SPLIT_RE.split(identifier.lower()) if t]


def _contains_run(longer: Sequence[str], shorter: Sequence[str]) -> bool:
    n = len(shorter)
    return any(list(longer[i:i + n]) == list(shorter) for i in range(len(longer) - n + 1))


def fuzzy_capability_match(identifier: str, pattern: str, min_length: int) -> bool:
    """
    Token-boundary containment in either direction.

    ``github-actions`` matches ``github``; ``socialize`` does not match
    ``social``. The contained side must carry at least ``min_length``
    characters so short fragments cannot match unrelated identifiers.
    """
    a, b = _tokens(identifier), _tokens(pattern)
    if not a or not b:
        return False
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if len("".join(shorter)) < min_length:
        return False
    return _contains_run(longer, shorter)


def match_capabilities(
    capabilities: Sequence[str],
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[BoostMatch]:
    table = config.capability_bonuses
    t = config.thresholds

    matches: List[BoostMatch] = []
    for identifier in capabilities:
        key = (identifier or "").strip().lower()
        if not key:
            continue
        if key in table:
            matches.append(BoostMatch(kind="capability", token=identifier, pattern=key))
            continue
        for pattern in table:
            if fuzzy_capability_match(key, pattern, t.min_fuzzy_length):
                matches.append(BoostMatch(
                    kind="capability_fuzzy",
                    token=identifier,
                    pattern=pattern,
                    scale=t.fuzzy_scale,
                ))
    return matches


def apply_capability_bonuses(
    traits: Mapping[str, int],
    capabilities: Sequence[str],
    config: EngineConfig = DEFAULT_CONFIG,
) -> Tuple[Dict[str, int], List[BoostMatch]]:
    matches = match_capabilities(capabilities, config)
    deltas = [(config.capability_bonuses[m.pattern], m.scale) for m in matches]
    boosted = apply_deltas(traits, deltas, config.thresholds.boost_ceiling)
    return boosted, matches
