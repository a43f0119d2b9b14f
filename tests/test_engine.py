"""
Pipeline tests for core/traits/engine.py

Tests cover:
- End-to-end trait vector on realistic documents
- Determinism of traits, fitness and fingerprint
- Halting on invalid traits and suspicious fitness
- Injected, immutable configuration
- Registration payload / block alert construction
"""
import dataclasses
from datetime import datetime, timezone

import pytest

from core.traits.engine import evaluate_vector, verify_agent
from core.traits.errors import SuspiciousFitnessBlock, TraitValidationError
from core.traits.lexicon import DEFAULT_CONFIG, TRAIT_NAMES
from core.traits.report import build_block_alert, build_registration_payload, format_alert_text


def with_thresholds(**changes):
    return dataclasses.replace(
        DEFAULT_CONFIG,
        thresholds=dataclasses.replace(DEFAULT_CONFIG.thresholds, **changes),
    )


class TestVerifyAgent:

    def test_vector_shape(self, agent_documents):
        result = verify_agent(documents=agent_documents, capabilities=["github"], agent_name="Nova")
        assert list(result.traits) == list(TRAIT_NAMES)
        assert all(isinstance(v, int) and 0 <= v <= 100 for v in result.traits.values())
        assert all(v <= 92 for v in result.traits.values())
        assert result.agent_name == "Nova"
        assert len(result.fingerprint) == 64

    def test_not_suspicious(self, agent_documents):
        result = verify_agent(documents=agent_documents)
        assert result.fitness.suspicious is False
        assert result.fitness.fitness >= 15
        assert result.fitness.tier is not None

    def test_deterministic(self, agent_documents):
        a = verify_agent(documents=agent_documents, capabilities=["github", "web-search"])
        b = verify_agent(documents=agent_documents, capabilities=["github", "web-search"])
        assert a.traits == b.traits
        assert a.fitness == b.fitness
        assert a.fingerprint == b.fingerprint

    def test_boost_trace(self, agent_documents):
        result = verify_agent(documents=agent_documents, capabilities=["github-actions"])
        seen = {(m.kind, m.pattern) for m in result.boosts}
        assert ("role", "developer") in seen
        assert ("role", "teacher") in seen
        assert ("tool", "github") in seen
        assert ("capability_fuzzy", "github") in seen

    def test_capabilities_raise_traits(self, agent_documents):
        base = verify_agent(documents=agent_documents)
        boosted = verify_agent(documents=agent_documents, capabilities=["trading-bot"])
        assert boosted.traits["trading"] > base.traits["trading"]
        assert boosted.fingerprint != base.fingerprint

    def test_warnings_propagate(self, agent_documents):
        result = verify_agent(documents=agent_documents, warnings=["TOOLS.md is short"])
        assert "TOOLS.md is short" in result.warnings

    def test_name_sanitized(self, agent_documents):
        result = verify_agent(documents=agent_documents, agent_name="<b>Nova</b>")
        assert result.agent_name == "bNova/b"

    def test_missing_documents_tolerated(self, agent_documents):
        result = verify_agent(documents={"soul": agent_documents["soul"], "tools": ""})
        assert len(result.traits) == 8


class TestPipelineHalts:

    def test_signal_free_text_is_degenerate(self):
        """No keywords anywhere: every trait sits on the floor"""
        with pytest.raises(TraitValidationError) as exc:
            verify_agent(documents={"soul": "Hello there. " * 40, "identity": "Just words. " * 20})
        assert any("identical" in e for e in exc.value.result.errors)

    def test_guard_blocks(self, agent_documents):
        config = with_thresholds(fitness_ceiling=5.0)
        with pytest.raises(SuspiciousFitnessBlock) as exc:
            verify_agent(documents=agent_documents, config=config)
        assert exc.value.result.suspicious is True
        assert set(exc.value.traits) == set(TRAIT_NAMES)


class TestEngineConfig:

    def test_default_config_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.thresholds.boost_ceiling = 100
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.role_boosts["developer"] = {"technical": 90}
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.role_boosts["developer"]["technical"] = 90

    def test_injected_config_does_not_leak(self, agent_documents):
        low = with_thresholds(boost_ceiling=20, normalized_ceiling=15)
        capped = verify_agent(documents=agent_documents, config=low)
        normal = verify_agent(documents=agent_documents)
        assert max(capped.traits.values()) <= 20
        assert max(normal.traits.values()) > 20


class TestEvaluateVector:

    def test_valid_vector(self, balanced_traits):
        traits, fitness, warnings = evaluate_vector(dict(balanced_traits, technical=72.4))
        assert traits["technical"] == 72
        assert fitness.fitness == pytest.approx(54.55)
        assert warnings == []

    def test_invalid_vector(self, balanced_traits):
        with pytest.raises(TraitValidationError):
            evaluate_vector(dict(balanced_traits, technical=float("nan")))

    def test_blocked_vector(self):
        with pytest.raises(SuspiciousFitnessBlock) as exc:
            evaluate_vector(dict(zip(TRAIT_NAMES, [96, 50, 50, 96, 96, 50, 96, 50])))
        assert "extreme" in exc.value.result.reason


class TestReport:

    def test_registration_payload(self, agent_documents):
        result = verify_agent(documents=agent_documents, agent_name="Nova")
        payload = build_registration_payload(result).model_dump()
        assert payload["name"] == "Nova"
        assert payload["dnaHash"] == result.fingerprint
        assert payload["generation"] == 0
        assert payload["source"] == "genomad-verify-skill"
        assert "soul" not in payload and "identity" not in payload

    def test_block_alert(self, agent_documents):
        config = with_thresholds(fitness_ceiling=5.0)
        with pytest.raises(SuspiciousFitnessBlock) as exc:
            verify_agent(documents=agent_documents, config=config)

        ts = datetime(2026, 1, 1, tzinfo=timezone.utc)
        alert = build_block_alert(exc.value, agent_name="Nova", documents=agent_documents, timestamp=ts)
        assert alert.timestamp == ts
        assert alert.agent_name == "Nova"
        assert alert.document_lengths == {k: len(v) for k, v in agent_documents.items()}
        assert alert.fitness == exc.value.result.fitness

        text = format_alert_text(alert)
        assert "Nova" in text
        assert alert.reason in text
