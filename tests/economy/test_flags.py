"""Tests for settlement flag effect composition and descriptions."""

import pytest

from trading_places.data.models import Settlement, SourceFlag, parse_source_flags
from trading_places.economy.flags import compose_flag_effects, describe_flag, flag_effect_lines


class TestComposeFlagEffects:
    """Test aggregation of flag effects."""

    def test_basic_composition(self):
        source_flags = parse_source_flags({
            "trade": {"supplyTransfer": 0.1},
            "contraband": {"contrabandChance": 0.2},
        })
        settlement = Settlement(name="Kemperbad", size="T", flags=("trade", "contraband"))

        modifiers = compose_flag_effects(settlement, source_flags)

        assert modifiers.supply_transfer == 0.1
        assert modifiers.contraband_chance == 0.2
        assert modifiers.applied_flags == ("trade", "contraband")

    def test_full_composition(self, sample_source_flags):
        settlement = Settlement(name="Grissenwald", size="V", flags=("trade", "contraband", "mining"))

        modifiers = compose_flag_effects(settlement, sample_source_flags)

        assert modifiers.supply_transfer == pytest.approx(0.1)
        assert modifiers.demand_transfer == pytest.approx(0.05)
        assert modifiers.availability_bonus_producers == pytest.approx(0.15)
        assert modifiers.availability_bonus_seekers == pytest.approx(-0.1)
        assert modifiers.category_supply_transfer["Wine"] == pytest.approx(0.15)
        assert modifiers.category_supply_transfer["Spices"] == pytest.approx(0.3)
        assert modifiers.category_demand_transfer == {"Tools": 0.25}
        assert modifiers.contraband_chance == pytest.approx(0.2)
        assert modifiers.ui_tags == ("market", "shady", "market")

    def test_quality_combines_additively(self, sample_source_flags):
        settlement = Settlement(name="A", flags=("trade", "contraband"))

        modifiers = compose_flag_effects(settlement, sample_source_flags)

        assert modifiers.quality_bonus == pytest.approx(0.3)
        assert modifiers.quality_multiplier == pytest.approx(1.3)

    def test_unknown_flags_contribute_nothing(self, sample_source_flags):
        settlement = Settlement(name="A", flags=("haunted", "trade"))

        modifiers = compose_flag_effects(settlement, sample_source_flags)

        assert modifiers.applied_flags == ("trade",)
        assert modifiers.supply_transfer == pytest.approx(0.1)

    def test_flag_lookup_falls_back_to_lower_case(self, sample_source_flags):
        settlement = Settlement(name="A", flags=("Trade",))

        modifiers = compose_flag_effects(settlement, sample_source_flags)

        assert modifiers.applied_flags == ("Trade",)
        assert modifiers.supply_transfer == pytest.approx(0.1)

    def test_flag_order_does_not_change_sums(self, sample_source_flags):
        forward = compose_flag_effects(Settlement(name="A", flags=("trade", "contraband")), sample_source_flags)
        reverse = compose_flag_effects(Settlement(name="A", flags=("contraband", "trade")), sample_source_flags)

        assert forward.contraband_chance == reverse.contraband_chance
        assert forward.category_supply_transfer["Wine"] == pytest.approx(reverse.category_supply_transfer["Wine"])

    def test_missing_inputs_give_neutral_modifiers(self, sample_settlement, sample_source_flags):
        assert compose_flag_effects(None, sample_source_flags).is_generic
        assert compose_flag_effects(sample_settlement, None).is_generic
        assert compose_flag_effects(Settlement(name="Plain"), sample_source_flags).is_generic


class TestFlagEffectLines:
    """Test human-readable effect lines."""

    def test_effect_lines(self, sample_source_flags):
        lines = flag_effect_lines(sample_source_flags["trade"])

        assert lines == [
            "+10% supply transfer rate",
            "+5% demand transfer rate",
            "+20% availability bonus for producers",
            "-10% availability bonus for seekers",
            "+10% Wine supply transfer",
            "+10% quality multiplier",
            "UI tags: market",
        ]

    def test_contraband_line(self, sample_source_flags):
        assert "+20% chance of contraband goods" in flag_effect_lines(sample_source_flags["contraband"])

    def test_empty_flag_has_no_lines(self):
        assert flag_effect_lines(SourceFlag(name="quiet")) == []


class TestDescribeFlag:
    """Test plain-text flag descriptions."""

    def test_known_flag(self, sample_source_flags):
        text = describe_flag("trade", sample_source_flags)
        lines = text.split("\n")

        assert lines[0] == "Trade"
        assert lines[2] == "Busy trading town"
        assert lines[4] == "Trading Effects:"
        assert "• +10% supply transfer rate" in lines

    def test_unknown_flag(self, sample_source_flags):
        assert describe_flag("haunted", sample_source_flags) == "haunted settlement"

    def test_without_definitions(self):
        assert describe_flag("trade", None) == "trade settlement"


def test_negative_effects_are_signed():
    flag = SourceFlag(name="poor", supply_transfer=-0.05, quality=0.9)

    assert flag_effect_lines(flag) == ["-5% supply transfer rate", "-10% quality multiplier"]


def test_neutral_quality_reads_plus_zero():
    assert flag_effect_lines(SourceFlag(name="plain", quality=1.0)) == ["+0% quality multiplier"]
