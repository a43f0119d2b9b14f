from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping

from core.traits.lexicon import TRAIT_NAMES
from core.traits.scoring import round_half_up


DEFAULT_TRAIT_VALUE = 50
MAX_NAME_LENGTH = 50
UNKNOWN_AGENT = "Unknown Agent"

# \t \n \r are left to the whitespace collapse
_FORBIDDEN_NAME_CHARS_RE = re.compile(r"[<>{}\[\]`\"'\\|*#\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WS_RE = re.compile(r"\s+")


def _clamp_int(v: Any, default: int = DEFAULT_TRAIT_VALUE, lo: int = 0, hi: int = 100) -> int:
    if isinstance(v, bool):
        return default
    try:
        f = float(v)
    except OverflowError:
        return hi if v > 0 else lo
    except (TypeError, ValueError):
        return default
    if not math.isfinite(f):
        return default
    return int(max(lo, min(hi, round_half_up(f))))


def sanitize_traits(traits: Mapping[str, Any]) -> Dict[str, int]:
    """Last pass before handoff: all eight keys, integers in [0, 100]."""
    return {name: _clamp_int(traits.get(name)) for name in TRAIT_NAMES}


def sanitize_name(name: Any) -> str:
    text = "" if name is None else str(name)
    text = _FORBIDDEN_NAME_CHARS_RE.sub("", text)
    text = _WS_RE.sub(" ", text).strip()
    text = text[:MAX_NAME_LENGTH].strip()
    return text or UNKNOWN_AGENT
