from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


MatchKind = Literal["role", "tool", "capability", "capability_fuzzy"]


class Document(BaseModel):
    role: str
    content: str = ""
    weight: float = Field(default=1.0, gt=0)


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class FitnessResult(BaseModel):
    fitness: float
    suspicious: bool = False
    reason: Optional[str] = None

    # diagnostics
    average: float = 0.0
    synergy: float = 0.0
    tier: Optional[str] = None


class BoostMatch(BaseModel):
    kind: MatchKind
    token: str
    pattern: str
    scale: float = 1.0


class VerificationResult(BaseModel):
    agent_name: str
    traits: Dict[str, int]
    raw_scores: Dict[str, float]
    confidence: int = Field(ge=0, le=100)
    fitness: FitnessResult
    fingerprint: str
    warnings: List[str] = Field(default_factory=list)
    boosts: List[BoostMatch] = Field(default_factory=list)
    scoring_version: str = "genomad-heuristic-v2"


class BlockAlert(BaseModel):
    timestamp: datetime
    agent_name: str
    reason: str
    traits: Dict[str, float]
    fitness: float
    document_lengths: Dict[str, int]


class RegistrationPayload(BaseModel):
    name: str
    traits: Dict[str, int]
    dnaHash: str
    fitness: float
    confidence: int
    generation: int = 0
    source: str = "genomad-verify-skill"
