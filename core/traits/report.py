from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Mapping, Optional

from core.traits.errors import SuspiciousFitnessBlock
from core.traits.models import BlockAlert, RegistrationPayload, VerificationResult
from core.traits.sanitize import sanitize_name


def build_registration_payload(result: VerificationResult) -> RegistrationPayload:
    # traits + hash only; source documents never leave the machine
    return RegistrationPayload(
        name=result.agent_name,
        traits=dict(result.traits),
        dnaHash=result.fingerprint,
        fitness=result.fitness.fitness,
        confidence=result.confidence,
    )


def document_lengths(documents: Mapping[str, str]) -> Dict[str, int]:
    return {role: len(text or "") for role, text in documents.items()}


def build_block_alert(
    block: SuspiciousFitnessBlock,
    *,
    agent_name: Optional[str],
    documents: Mapping[str, str],
    timestamp: Optional[datetime] = None,
) -> BlockAlert:
    return BlockAlert(
        timestamp=timestamp or datetime.now(timezone.utc),
        agent_name=sanitize_name(agent_name),
        reason=block.result.reason or "suspicious fitness",
        traits={k: float(v) for k, v in block.traits.items()},
        fitness=block.result.fitness,
        document_lengths=document_lengths(documents),
    )


def format_alert_text(alert: BlockAlert) -> str:
    traits_block = "\n".join(f"- {k}: {v:g}" for k, v in sorted(alert.traits.items()))
    lengths = ", ".join(f"{k}={v}" for k, v in alert.document_lengths.items())

    return f"""
Genomad Verify: registration blocked
==================================================

Agent: {alert.agent_name}
Time (UTC): {alert.timestamp.isoformat()}
Reason: {alert.reason}
Fitness: {alert.fitness:.2f}

Traits:
{traits_block}

Document lengths: {lengths or 'none'}
""".strip()
