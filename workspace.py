# workspace.py
"""
Local workspace access: the three persona documents, the installed skills
and the upstream checks that must hold before any scoring happens.

Nothing read here is ever sent anywhere; only traits + fingerprint are.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from core.traits.errors import PreconditionError
from core.traits.sanitize import UNKNOWN_AGENT

logger = logging.getLogger("genomad")

DOCUMENT_FILES: Dict[str, str] = {
    "soul": "SOUL.md",
    "identity": "IDENTITY.md",
    "tools": "TOOLS.md",
}
NESTED_WORKSPACE = os.path.join(".openclaw", "workspace")
SKILLS_DIR = "skills"

MIN_SOUL_CHARS = 200
MIN_IDENTITY_CHARS = 100
SHORT_SOUL_CHARS = 500
SHORT_IDENTITY_CHARS = 250

DUPLICATE_ERROR_OVERLAP = 0.90
DUPLICATE_WARNING_OVERLAP = 0.70

PLACEHOLDER_PATTERNS = [
    re.compile(r"lorem ipsum", re.IGNORECASE),
    re.compile(r"\{\{\s*[\w.-]+\s*\}\}"),
    re.compile(r"\[\s*(?:your|agent)[ _-]?name\s*\]", re.IGNORECASE),
    re.compile(r"<\s*insert\b[^>]*>", re.IGNORECASE),
    re.compile(r"\breplace this\b", re.IGNORECASE),
]

_NAME_RE = re.compile(r"name[:\s]+([^\n]+)", re.IGNORECASE)
_WORD_RE = re.compile(r"\w+")

_STOPWORDS: Set[str] = {
    "the", "a", "an", "is", "are", "was", "were", "be", "been", "to", "of",
    "in", "for", "on", "with", "at", "by", "from", "and", "or", "not", "that",
    "this", "it", "i", "my", "me", "we", "our", "you", "your",
    "el", "la", "los", "las", "un", "una", "de", "del", "y", "o", "en", "con",
    "por", "para", "que", "es", "soy", "mi",
}


@dataclass
class AgentFiles:
    soul: str = ""
    identity: str = ""
    tools: str = ""
    capabilities: List[str] = field(default_factory=list)

    def documents(self) -> Dict[str, str]:
        return {"soul": self.soul, "identity": self.identity, "tools": self.tools}


def resolve_workspace(workspace: Optional[str] = None) -> str:
    return os.path.abspath(workspace or os.getcwd())


def _read_document(workspace: str, filename: str) -> str:
    for candidate in (
        os.path.join(workspace, filename),
        os.path.join(workspace, NESTED_WORKSPACE, filename),
    ):
        if os.path.isfile(candidate):
            with open(candidate, "r", encoding="utf-8") as f:
                return f.read()
    return ""


def list_capabilities(workspace: str) -> List[str]:
    skills = os.path.join(workspace, SKILLS_DIR)
    if not os.path.isdir(skills):
        return []
    return sorted(e for e in os.listdir(skills) if not e.startswith("."))


def read_agent_files(workspace: Optional[str] = None) -> AgentFiles:
    root = resolve_workspace(workspace)
    files = AgentFiles(
        soul=_read_document(root, DOCUMENT_FILES["soul"]),
        identity=_read_document(root, DOCUMENT_FILES["identity"]),
        tools=_read_document(root, DOCUMENT_FILES["tools"]),
        capabilities=list_capabilities(root),
    )
    logger.info(
        "Workspace read: %s soul=%d identity=%d tools=%d skills=%d",
        root, len(files.soul), len(files.identity), len(files.tools), len(files.capabilities),
    )
    return files


def extract_agent_name(identity: str) -> str:
    m = _NAME_RE.search(identity or "")
    return m.group(1).strip() if m else UNKNOWN_AGENT


# -----------------------------
# Preconditions
# -----------------------------

def _content_tokens(text: str) -> Set[str]:
    return {w for w in _WORD_RE.findall(text.lower()) if w not in _STOPWORDS}


def token_overlap(a: str, b: str) -> float:
    """Jaccard overlap of content words (stopwords removed)."""
    ta, tb = _content_tokens(a), _content_tokens(b)
    union = ta | tb
    if not union:
        return 0.0
    return len(ta & tb) / len(union)


def find_placeholders(text: str) -> List[str]:
    found: List[str] = []
    for p in PLACEHOLDER_PATTERNS:
        m = p.search(text or "")
        if m:
            found.append(m.group(0))
    return found


def check_preconditions(files: AgentFiles) -> List[str]:
    """
    Raise PreconditionError listing every failed check; otherwise return
    the non-fatal warnings.
    """
    errors: List[str] = []
    warnings: List[str] = []

    soul = (files.soul or "").strip()
    identity = (files.identity or "").strip()

    if len(soul) < MIN_SOUL_CHARS:
        errors.append(f"SOUL.md missing or too short ({len(soul)} < {MIN_SOUL_CHARS} chars)")
    elif len(soul) < SHORT_SOUL_CHARS:
        warnings.append(f"SOUL.md is short ({len(soul)} chars); confidence will be low")

    if len(identity) < MIN_IDENTITY_CHARS:
        errors.append(f"IDENTITY.md missing or too short ({len(identity)} < {MIN_IDENTITY_CHARS} chars)")
    elif len(identity) < SHORT_IDENTITY_CHARS:
        warnings.append(f"IDENTITY.md is short ({len(identity)} chars)")

    if not (files.tools or "").strip():
        warnings.append("TOOLS.md not found; tool signals unavailable")

    for role, text in files.documents().items():
        markers = find_placeholders(text)
        if markers:
            errors.append(f"{DOCUMENT_FILES[role]} contains template placeholders: {', '.join(markers)}")

    if soul and identity:
        overlap = token_overlap(soul, identity)
        if overlap >= DUPLICATE_ERROR_OVERLAP:
            errors.append(f"SOUL.md and IDENTITY.md are near-duplicates (overlap {overlap:.2f})")
        elif overlap >= DUPLICATE_WARNING_OVERLAP:
            warnings.append(f"SOUL.md and IDENTITY.md overlap heavily ({overlap:.2f})")

    if errors:
        raise PreconditionError(errors, warnings)
    return warnings
