from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple


TRAIT_NAMES: Tuple[str, ...] = (
    "technical",
    "creativity",
    "social",
    "analysis",
    "empathy",
    "trading",
    "teaching",
    "leadership",
)

TOP_KEYWORD_COUNT = 5

DeltaTable = Mapping[str, Mapping[str, float]]


@dataclass(frozen=True)
class KeywordConfig:
    keywords: Tuple[str, ...]
    weight: float

    @property
    def top_keywords(self) -> Tuple[str, ...]:
        return self.keywords[:TOP_KEYWORD_COUNT]


@dataclass(frozen=True)
class ScoringThresholds:
    # raw scorer
    base_multiplier: float = 4.0
    heading_multiplier: float = 15.0
    bold_multiplier: float = 8.0
    list_multiplier: float = 5.0

    # normalizer
    length_divisor: float = 1500.0
    max_length_factor: float = 1.5
    log_scale: float = 35.0
    normalized_floor: int = 8
    normalized_ceiling: int = 88
    confidence_scale: float = 70.0

    # boosts
    boost_ceiling: int = 92
    fuzzy_scale: float = 0.4
    min_fuzzy_length: int = 4

    # validator
    extreme_value: int = 95
    uniform_variance: float = 10.0

    # fitness guard
    average_anomaly: float = 90.0
    fitness_ceiling: float = 92.0
    extreme_count: int = 4
    fitness_floor: float = 15.0
    synergy_threshold: int = 70
    synergy_bonus: float = 2.0

    # fingerprint
    excerpt_chars: int = 500


def _freeze(table: Dict[str, Dict[str, float]]) -> DeltaTable:
    return MappingProxyType({k: MappingProxyType(dict(v)) for k, v in table.items()})


# Order matters: the first five keywords of each list drive the structural bonuses.
_LEXICON: Dict[str, KeywordConfig] = {
    "technical": KeywordConfig(
        keywords=(
            "code", "programming", "developer", "api", "software",
            "typescript", "python", "javascript", "rust", "solidity",
            "database", "github", "backend", "frontend", "debug",
            "deploy", "algorithm", "código", "programación", "desarrollo",
            "servidor", "base de datos",
        ),
        weight=1.2,
    ),
    "creativity": KeywordConfig(
        keywords=(
            "creative", "design", "art", "imagination", "innovative",
            "original", "unique", "story", "music", "visual",
            "aesthetic", "invent", "creativo", "creatividad", "diseño",
            "arte", "imaginación", "innovador",
        ),
        weight=1.0,
    ),
    "social": KeywordConfig(
        keywords=(
            "social", "community", "communication", "conversation", "friendly",
            "discord", "twitter", "telegram", "chat", "network",
            "engage", "comunidad", "comunicación", "conversación", "amigable",
            "redes",
        ),
        weight=0.9,
    ),
    "analysis": KeywordConfig(
        keywords=(
            "analyze", "research", "data", "logic", "evaluate",
            "strategic", "assess", "metrics", "insight", "statistics",
            "critical thinking", "hypothesis", "analizar", "análisis", "investigación",
            "datos", "lógica", "evaluar",
        ),
        weight=1.1,
    ),
    "empathy": KeywordConfig(
        keywords=(
            "empathy", "understand", "support", "care", "kindness",
            "help", "emotion", "feel", "listen", "compassion",
            "patient", "wellbeing", "empatía", "comprender", "apoyo",
            "cuidado", "ayudar", "emociones", "escuchar",
        ),
        weight=1.0,
    ),
    "trading": KeywordConfig(
        keywords=(
            "trading", "defi", "crypto", "token", "market",
            "price", "investment", "portfolio", "liquidity", "blockchain",
            "exchange", "wallet", "yield", "mercado", "inversión",
            "precio", "cripto", "finanzas",
        ),
        weight=0.8,
    ),
    "teaching": KeywordConfig(
        keywords=(
            "teach", "explain", "tutorial", "mentor", "education",
            "guide", "learn", "lesson", "student", "course",
            "enseñar", "explicar", "educación", "aprender", "guía",
            "mentoría", "estudiante", "curso",
        ),
        weight=1.0,
    ),
    "leadership": KeywordConfig(
        keywords=(
            "lead", "manage", "vision", "decision", "team",
            "coordinate", "direct", "initiative", "strategy", "organize",
            "delegate", "liderar", "gestionar", "visión", "decisión",
            "equipo", "coordinar", "dirigir",
        ),
        weight=1.0,
    ),
}

_DOCUMENT_WEIGHTS: Dict[str, float] = {
    "soul": 1.5,
    "identity": 1.3,
    "tools": 1.0,
}

DEFAULT_DOCUMENT_WEIGHT = 1.0

_ROLE_BOOSTS: Dict[str, Dict[str, float]] = {
    "developer": {"technical": 10, "analysis": 5},
    "desarrollador": {"technical": 10, "analysis": 5},
    "programmer": {"technical": 10, "analysis": 4},
    "programador": {"technical": 10, "analysis": 4},
    "engineer": {"technical": 8, "analysis": 6},
    "ingeniero": {"technical": 8, "analysis": 6},
    "designer": {"creativity": 10, "technical": 3},
    "diseñador": {"creativity": 10, "technical": 3},
    "artist": {"creativity": 12, "empathy": 3},
    "artista": {"creativity": 12, "empathy": 3},
    "writer": {"creativity": 8, "teaching": 3},
    "escritor": {"creativity": 8, "teaching": 3},
    "trader": {"trading": 12, "analysis": 5},
    "inversor": {"trading": 8, "analysis": 4},
    "analyst": {"analysis": 10, "technical": 3},
    "analista": {"analysis": 10, "technical": 3},
    "researcher": {"analysis": 8, "teaching": 3},
    "investigador": {"analysis": 8, "teaching": 3},
    "teacher": {"teaching": 12, "empathy": 4},
    "profesor": {"teaching": 12, "empathy": 4},
    "maestro": {"teaching": 12, "empathy": 4},
    "tutor": {"teaching": 10, "empathy": 3},
    "coach": {"teaching": 6, "leadership": 6, "empathy": 3},
    "therapist": {"empathy": 12, "social": 3},
    "terapeuta": {"empathy": 12, "social": 3},
    "companion": {"empathy": 8, "social": 6},
    "compañero": {"empathy": 8, "social": 6},
    "community manager": {"social": 12, "leadership": 3},
    "moderator": {"social": 6, "leadership": 4},
    "moderador": {"social": 6, "leadership": 4},
    "leader": {"leadership": 12, "social": 4},
    "líder": {"leadership": 12, "social": 4},
    "manager": {"leadership": 8, "analysis": 3},
    "founder": {"leadership": 10, "creativity": 3},
    "fundador": {"leadership": 10, "creativity": 3},
}

_TOOL_BOOSTS: Dict[str, Dict[str, float]] = {
    "github": {"technical": 6},
    "gitlab": {"technical": 6},
    "vscode": {"technical": 5},
    "vs code": {"technical": 5},
    "neovim": {"technical": 5},
    "docker": {"technical": 6},
    "kubernetes": {"technical": 6},
    "react": {"technical": 5, "creativity": 2},
    "next.js": {"technical": 5},
    "django": {"technical": 5},
    "postgres": {"technical": 4, "analysis": 2},
    "jupyter": {"analysis": 6, "technical": 3},
    "pandas": {"analysis": 6, "technical": 3},
    "excel": {"analysis": 4},
    "tableau": {"analysis": 6},
    "figma": {"creativity": 8},
    "photoshop": {"creativity": 8},
    "blender": {"creativity": 8, "technical": 2},
    "midjourney": {"creativity": 6},
    "tradingview": {"trading": 8, "analysis": 3},
    "binance": {"trading": 6},
    "uniswap": {"trading": 6, "technical": 2},
    "metamask": {"trading": 4, "technical": 2},
    "discord": {"social": 5},
    "telegram": {"social": 4},
    "slack": {"social": 3, "leadership": 2},
    "notion": {"leadership": 3, "analysis": 2},
    "jira": {"leadership": 4, "technical": 2},
    "trello": {"leadership": 3},
    "anki": {"teaching": 5},
    "moodle": {"teaching": 6},
}

_CAPABILITY_BONUSES: Dict[str, Dict[str, float]] = {
    "github": {"technical": 8},
    "coding-agent": {"technical": 10, "analysis": 3},
    "code-review": {"technical": 8, "analysis": 4},
    "web-search": {"analysis": 6},
    "deep-research": {"analysis": 10, "teaching": 2},
    "data-analysis": {"analysis": 10, "technical": 3},
    "image-generation": {"creativity": 10},
    "music-generation": {"creativity": 10},
    "video-editing": {"creativity": 8, "technical": 2},
    "trading-bot": {"trading": 10, "analysis": 4},
    "crypto-wallet": {"trading": 6, "technical": 2},
    "market-data": {"trading": 6, "analysis": 4},
    "discord": {"social": 6},
    "twitter": {"social": 6},
    "telegram": {"social": 5},
    "email": {"social": 3},
    "tutor": {"teaching": 10, "empathy": 3},
    "flashcards": {"teaching": 6},
    "journal": {"empathy": 6},
    "wellbeing": {"empathy": 8},
    "calendar": {"leadership": 4},
    "project-management": {"leadership": 8, "analysis": 2},
}

_SYNERGY_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("technical", "analysis"),
    ("teaching", "empathy"),
    ("social", "leadership"),
    ("creativity", "technical"),
)


@dataclass(frozen=True)
class EngineConfig:
    """
    Immutable bundle of every table and threshold the engine reads.
    Stages never read module globals directly; they take one of these.
    """

    lexicon: Mapping[str, KeywordConfig] = field(
        default_factory=lambda: MappingProxyType(dict(_LEXICON))
    )
    document_weights: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(_DOCUMENT_WEIGHTS))
    )
    role_boosts: DeltaTable = field(default_factory=lambda: _freeze(_ROLE_BOOSTS))
    tool_boosts: DeltaTable = field(default_factory=lambda: _freeze(_TOOL_BOOSTS))
    capability_bonuses: DeltaTable = field(default_factory=lambda: _freeze(_CAPABILITY_BONUSES))
    synergy_pairs: Tuple[Tuple[str, str], ...] = _SYNERGY_PAIRS
    thresholds: ScoringThresholds = field(default_factory=ScoringThresholds)

    def keywords_for(self, trait: str) -> KeywordConfig:
        return self.lexicon[trait]

    def document_weight(self, role: str) -> float:
        return float(self.document_weights.get(role, DEFAULT_DOCUMENT_WEIGHT))


DEFAULT_CONFIG = EngineConfig()
