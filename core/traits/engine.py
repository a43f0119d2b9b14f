from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from core.traits.boosts import apply_capability_bonuses, apply_contextual_boosts
from core.traits.errors import SuspiciousFitnessBlock, TraitValidationError
from core.traits.fingerprint import generate_fingerprint
from core.traits.fitness import evaluate_fitness
from core.traits.lexicon import DEFAULT_CONFIG, EngineConfig
from core.traits.models import FitnessResult, VerificationResult
from core.traits.sanitize import sanitize_name, sanitize_traits
from core.traits.scoring import build_documents, score_documents
from core.traits.validation import validate_traits

logger = logging.getLogger("genomad")


def _guard(traits: Mapping[str, Any], config: EngineConfig) -> Tuple[FitnessResult, List[str]]:
    validation = validate_traits(traits, config)
    if not validation.valid:
        logger.warning("Trait validation failed: %s", "; ".join(validation.errors))
        raise TraitValidationError(validation)

    fitness = evaluate_fitness(traits, config)
    if fitness.suspicious:
        logger.warning("Suspicious fitness blocked: %s", fitness.reason)
        raise SuspiciousFitnessBlock(fitness, traits)

    return fitness, list(validation.warnings)


def verify_agent(
    *,
    documents: Mapping[str, str],
    capabilities: Sequence[str] = (),
    agent_name: Optional[str] = None,
    warnings: Optional[List[str]] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> VerificationResult:
    """
    Full pipeline: score -> normalize -> contextual boosts -> capability
    bonuses -> validate -> fitness guard -> sanitize -> fingerprint.

    ``documents`` maps a role (soul / identity / tools) to its text.
    Raises TraitValidationError or SuspiciousFitnessBlock; neither is
    retried or corrected.
    """
    docs = build_documents(documents, config)

    raw, normalized, confidence = score_documents(docs, config)
    traits, context_matches = apply_contextual_boosts(normalized, docs, config)
    traits, capability_matches = apply_capability_bonuses(traits, capabilities, config)

    logger.debug(
        "Traits scored: normalized=%s boosted=%s matches=%d",
        normalized, traits, len(context_matches) + len(capability_matches),
    )

    fitness, validation_warnings = _guard(traits, config)

    clean = sanitize_traits(traits)
    fingerprint = generate_fingerprint(clean, docs, config.thresholds.excerpt_chars)

    result = VerificationResult(
        agent_name=sanitize_name(agent_name),
        traits=clean,
        raw_scores={k: round(v, 2) for k, v in raw.items()},
        confidence=confidence,
        fitness=fitness,
        fingerprint=fingerprint,
        warnings=list(warnings or []) + validation_warnings,
        boosts=context_matches + capability_matches,
    )
    logger.info(
        "Agent verified: name=%s fitness=%.2f tier=%s confidence=%d",
        result.agent_name, fitness.fitness, fitness.tier, confidence,
    )
    return result


def evaluate_vector(
    traits: Mapping[str, Any],
    config: EngineConfig = DEFAULT_CONFIG,
) -> Tuple[Dict[str, int], FitnessResult, List[str]]:
    """Validate + guard + sanitize a vector computed elsewhere."""
    fitness, validation_warnings = _guard(traits, config)
    return sanitize_traits(traits), fitness, validation_warnings
