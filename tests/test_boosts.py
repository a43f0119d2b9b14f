"""
Unit tests for core/traits/boosts.py

Tests cover:
- Generic bounded delta application
- Contextual role/tool boosts (presence-based, capped at 92)
- Capability bonuses (exact, fuzzy, stacking, short-fragment guard)
"""
from core.traits.boosts import (
    apply_capability_bonuses,
    apply_contextual_boosts,
    apply_deltas,
    detect_tokens,
    fuzzy_capability_match,
    match_capabilities,
)
from core.traits.lexicon import TRAIT_NAMES
from core.traits.models import Document


def flat(value: int = 40):
    return {name: value for name in TRAIT_NAMES}


def docs(text: str):
    return [Document(role="soul", content=text, weight=1.5)]


class TestApplyDeltas:

    def test_deltas_accumulate(self):
        out = apply_deltas(flat(), [({"technical": 5}, 1.0), ({"technical": 3}, 1.0)], ceiling=92)
        assert out["technical"] == 48

    def test_scaled_delta_rounds(self):
        out = apply_deltas(flat(), [({"technical": 8}, 0.4)], ceiling=92)
        assert out["technical"] == 43

    def test_half_rounds_up(self):
        out = apply_deltas(flat(), [({"technical": 5}, 0.5)], ceiling=92)
        assert out["technical"] == 43

    def test_ceiling_applies_after_accumulation(self):
        out = apply_deltas(flat(85), [({"technical": 5}, 1.0), ({"technical": 5}, 1.0)], ceiling=92)
        assert out["technical"] == 92

    def test_never_lowers_a_trait(self):
        traits = dict(flat(), technical=95)
        out = apply_deltas(traits, [({"technical": 2}, 1.0)], ceiling=92)
        assert out["technical"] == 95

    def test_input_not_mutated(self):
        traits = flat()
        apply_deltas(traits, [({"social": 10}, 1.0)], ceiling=92)
        assert traits["social"] == 40


class TestContextualBoosts:

    def test_role_token_boosts(self):
        out, matches = apply_contextual_boosts(flat(), docs("I am a developer."))
        assert out["technical"] == 50
        assert out["analysis"] == 45
        assert [m.token for m in matches] == ["developer"]

    def test_presence_not_frequency(self):
        once, _ = apply_contextual_boosts(flat(), docs("developer"))
        ten, _ = apply_contextual_boosts(flat(), docs(" ".join(["developer"] * 10)))
        assert once == ten

    def test_roles_and_tools_accumulate(self):
        out, matches = apply_contextual_boosts(flat(), docs("Developer using GitHub and Docker"))
        # developer 10 + github 6 + docker 6
        assert out["technical"] == 62
        kinds = {(m.kind, m.token) for m in matches}
        assert kinds == {("role", "developer"), ("tool", "github"), ("tool", "docker")}

    def test_capped_at_92(self):
        out, _ = apply_contextual_boosts(flat(88), docs("developer programmer engineer github docker"))
        assert out["technical"] == 92

    def test_spanish_role(self):
        out, _ = apply_contextual_boosts(flat(), docs("Soy profesora y también profesor de historia"))
        assert out["teaching"] == 52

    def test_whole_word_only(self):
        assert detect_tokens("reactive programming", {"react": {"technical": 5}}) == []

    def test_no_tokens_no_change(self):
        out, matches = apply_contextual_boosts(flat(), docs("Hello there."))
        assert out == flat()
        assert matches == []


class TestCapabilityBonuses:

    def test_exact_match_case_insensitive(self):
        out, matches = apply_capability_bonuses(flat(), ["GitHub"])
        assert out["technical"] == 48
        assert matches[0].kind == "capability"
        assert matches[0].pattern == "github"

    def test_fuzzy_match_scaled(self):
        out, matches = apply_capability_bonuses(flat(), ["github-actions"])
        assert out["technical"] == 43
        assert [(m.kind, m.pattern, m.scale) for m in matches] == [("capability_fuzzy", "github", 0.4)]

    def test_fuzzy_match_either_direction(self):
        patterns = {m.pattern for m in match_capabilities(["data"])}
        assert patterns == {"data-analysis", "market-data"}

    def test_duplicates_stack(self):
        out, _ = apply_capability_bonuses(flat(), ["discord", "discord"])
        assert out["social"] == 52

    def test_capped_at_92(self):
        out, _ = apply_capability_bonuses(flat(90), ["coding-agent", "github", "code-review"])
        assert out["technical"] == 92

    def test_blank_identifiers_ignored(self):
        out, matches = apply_capability_bonuses(flat(), ["", "   "])
        assert out == flat()
        assert matches == []

    def test_unrelated_identifier_no_bonus(self):
        out, matches = apply_capability_bonuses(flat(), ["weather"])
        assert out == flat()
        assert matches == []


class TestFuzzyMatchGuard:
    """Substring matches must respect token boundaries and a minimum length"""

    def test_token_boundary_required(self):
        assert fuzzy_capability_match("socialize-bot", "social", 4) is False

    def test_token_run_matches(self):
        assert fuzzy_capability_match("my-github-tool", "github", 4) is True

    def test_short_fragment_rejected(self):
        assert fuzzy_capability_match("ai", "ai-tools", 4) is False

    def test_separator_variants(self):
        assert fuzzy_capability_match("coding_agent", "coding-agent", 4) is True
