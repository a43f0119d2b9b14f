from __future__ import annotations

import math
from statistics import pvariance
from typing import Any, List, Mapping

from core.traits.lexicon import DEFAULT_CONFIG, TRAIT_NAMES, EngineConfig
from core.traits.models import ValidationResult


def _is_number(v: Any) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    # ints are exact; math.isfinite would overflow on ones wider than a float
    return isinstance(v, int) or math.isfinite(v)


def _show(v: Any) -> str:
    if isinstance(v, int) and v.bit_length() > 64:
        return f"{'-' if v < 0 else ''}{v.bit_length()}-bit integer"
    return str(v)


def validate_traits(traits: Mapping[str, Any], config: EngineConfig = DEFAULT_CONFIG) -> ValidationResult:
    """
    Structural checks on a trait vector.

    Errors: missing key, non-numeric / non-finite / out-of-range value,
    all eight values identical. Warnings: any value above the extreme
    threshold, population variance below the uniformity threshold.
    """
    t = config.thresholds
    errors: List[str] = []
    warnings: List[str] = []

    for name in TRAIT_NAMES:
        if name not in traits:
            errors.append(f"Missing trait: {name}")

    values: List[float] = []
    for name in TRAIT_NAMES:
        if name not in traits:
            continue
        v = traits[name]
        if not _is_number(v):
            errors.append(f"Trait {name} is not a finite number: {v!r}")
            continue
        if v < 0 or v > 100:
            errors.append(f"Trait {name} out of range [0, 100]: {_show(v)}")
            continue
        if v > t.extreme_value:
            warnings.append(f"Trait {name} is extreme ({v})")
        values.append(float(v))

    if len(values) == len(TRAIT_NAMES):
        if len(set(values)) == 1:
            errors.append(f"All traits are identical ({values[0]:g}); vector is degenerate")
        else:
            variance = pvariance(values)
            if variance < t.uniform_variance:
                warnings.append(f"Traits are suspiciously uniform (variance {variance:.2f})")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
