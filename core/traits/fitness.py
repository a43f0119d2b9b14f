from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Tuple

from core.traits.lexicon import DEFAULT_CONFIG, TRAIT_NAMES, EngineConfig, ScoringThresholds
from core.traits.models import FitnessResult


@dataclass(frozen=True)
class FitnessContext:
    traits: Mapping[str, float]
    average: float
    synergy: float
    fitness: float
    extreme_count: int
    thresholds: ScoringThresholds


@dataclass(frozen=True)
class SuspicionRule:
    name: str
    predicate: Callable[[FitnessContext], bool]
    reason: Callable[[FitnessContext], str]


# Evaluated in order; the first match blocks the result.
SUSPICION_RULES: Tuple[SuspicionRule, ...] = (
    SuspicionRule(
        name="average_anomaly",
        predicate=lambda c: c.average > c.thresholds.average_anomaly,
        reason=lambda c: (
            f"Average trait score anomalously high "
            f"({c.average:.1f} > {c.thresholds.average_anomaly:g})"
        ),
    ),
    SuspicionRule(
        name="fitness_ceiling",
        predicate=lambda c: c.fitness > c.thresholds.fitness_ceiling,
        reason=lambda c: (
            f"Fitness exceeds maximum permitted "
            f"({c.fitness:.1f} > {c.thresholds.fitness_ceiling:g})"
        ),
    ),
    SuspicionRule(
        name="extreme_traits",
        predicate=lambda c: c.extreme_count >= c.thresholds.extreme_count,
        reason=lambda c: (
            f"Too many extreme traits ({c.extreme_count} above "
            f"{c.thresholds.extreme_value}); indicates manipulation"
        ),
    ),
)


FITNESS_TIERS: List[Tuple[float, str]] = [
    (80, "Apex"),
    (60, "Established"),
    (40, "Developing"),
    (0, "Nascent"),
]


def interpret(fitness: float) -> str:
    for lo, label in FITNESS_TIERS:
        if fitness >= lo:
            return label
    return FITNESS_TIERS[-1][1]


def compute_synergy(traits: Mapping[str, float], config: EngineConfig = DEFAULT_CONFIG) -> float:
    t = config.thresholds
    synergy = 0.0
    for a, b in config.synergy_pairs:
        if traits[a] > t.synergy_threshold and traits[b] > t.synergy_threshold:
            synergy += t.synergy_bonus
    return synergy


def build_context(traits: Mapping[str, float], config: EngineConfig = DEFAULT_CONFIG) -> FitnessContext:
    t = config.thresholds
    values = [float(traits[name]) for name in TRAIT_NAMES]
    average = sum(values) / len(values)
    synergy = compute_synergy(traits, config)
    return FitnessContext(
        traits=traits,
        average=average,
        synergy=synergy,
        fitness=average + synergy,
        extreme_count=sum(1 for v in values if v > t.extreme_value),
        thresholds=t,
    )


def first_violation(
    ctx: FitnessContext,
    rules: Tuple[SuspicionRule, ...] = SUSPICION_RULES,
) -> Optional[SuspicionRule]:
    for rule in rules:
        if rule.predicate(ctx):
            return rule
    return None


def evaluate_fitness(
    traits: Mapping[str, float],
    config: EngineConfig = DEFAULT_CONFIG,
    rules: Tuple[SuspicionRule, ...] = SUSPICION_RULES,
) -> FitnessResult:
    """
    Fitness = mean(traits) + synergy bonuses.

    A red flag blocks outright: the fitness is reported as computed and
    ``suspicious`` is set. Only a clean vector gets the floor applied.
    """
    ctx = build_context(traits, config)

    rule = first_violation(ctx, rules)
    if rule is not None:
        return FitnessResult(
            fitness=round(ctx.fitness, 2),
            suspicious=True,
            reason=rule.reason(ctx),
            average=round(ctx.average, 2),
            synergy=ctx.synergy,
        )

    fitness = max(ctx.fitness, config.thresholds.fitness_floor)
    return FitnessResult(
        fitness=round(fitness, 2),
        suspicious=False,
        average=round(ctx.average, 2),
        synergy=ctx.synergy,
        tier=interpret(fitness),
    )
