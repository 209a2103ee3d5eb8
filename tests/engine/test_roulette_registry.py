"""Tests for the roulette wheel and bet registry."""

from collections import Counter

import pytest

from settlement.errors import InvalidBet, UnknownSelection
from settlement.roulette.registry import (
    BetCategory,
    bet_id_for,
    bets_covering,
    format_bet_id,
    get_bet_config,
    get_registry,
)
from settlement.roulette.wheel import (
    BLACK_NUMBERS,
    DOUBLE_ZERO,
    RED_NUMBERS,
    Color,
    Variant,
    color_of,
    pocket_label,
    spin,
    validate_number,
)


class TestWheel:
    """Tests for wheel layouts and colors."""

    def test_european_wheel_pockets(self):
        """Single-zero wheel has 0-36 once each."""
        assert sorted(Variant.EUROPEAN.pockets) == list(range(37))

    def test_american_wheel_pockets(self):
        """Double-zero wheel adds the 00 pocket."""
        assert sorted(Variant.AMERICAN.pockets) == list(range(38))
        assert DOUBLE_ZERO in Variant.AMERICAN.pockets

    def test_red_black_partition(self):
        """Red and black split 1-36 evenly."""
        assert len(RED_NUMBERS) == 18
        assert len(BLACK_NUMBERS) == 18
        assert RED_NUMBERS | BLACK_NUMBERS == set(range(1, 37))
        assert not RED_NUMBERS & BLACK_NUMBERS

    def test_colors(self):
        """Zeros are green."""
        assert color_of(0) == Color.GREEN
        assert color_of(DOUBLE_ZERO) == Color.GREEN
        assert color_of(17) == Color.BLACK
        assert color_of(1) == Color.RED
        assert color_of(32) == Color.RED

    def test_pocket_label(self):
        """The double zero is labelled 00."""
        assert pocket_label(DOUBLE_ZERO) == "00"
        assert pocket_label(7) == "7"

    def test_validate_number(self):
        """Numbers off the wheel are rejected."""
        assert validate_number(36) == 36
        with pytest.raises(UnknownSelection):
            validate_number(37, Variant.EUROPEAN)
        with pytest.raises(UnknownSelection):
            validate_number(-1)
        with pytest.raises(UnknownSelection):
            validate_number(True)
        assert validate_number(DOUBLE_ZERO, Variant.AMERICAN) == DOUBLE_ZERO

    def test_spin_covers_wheel(self, rng):
        """Every pocket comes up and nothing else does."""
        seen = Counter(spin(rng, Variant.AMERICAN) for _ in range(5000))
        assert set(seen) == set(Variant.AMERICAN.pockets)


class TestRegistryContents:
    """Tests for the generated registry."""

    EUROPEAN_COUNTS = {
        BetCategory.STRAIGHT: 37,
        BetCategory.SPLIT: 60,
        BetCategory.STREET: 12,
        BetCategory.CORNER: 22,
        BetCategory.SIX_LINE: 11,
        BetCategory.DOZEN: 3,
        BetCategory.COLUMN: 3,
        BetCategory.EVEN_MONEY: 6,
    }

    def test_european_category_counts(self):
        """Single-zero layout has the standard number of each bet."""
        registry = get_registry(Variant.EUROPEAN)
        for category, count in self.EUROPEAN_COUNTS.items():
            assert len(registry.by_category(category)) == count
        assert len(registry) == sum(self.EUROPEAN_COUNTS.values())

    def test_american_extra_bets(self):
        """Double-zero layout adds 00 straight and reworks the zero splits."""
        registry = get_registry(Variant.AMERICAN)
        assert len(registry.by_category(BetCategory.STRAIGHT)) == 38
        assert len(registry.by_category(BetCategory.SPLIT)) == 62
        assert "num_00" in registry
        assert "split_0_00" in registry
        assert "split_00_3" in registry
        assert "split_0_3" not in registry

    @pytest.mark.parametrize("variant", list(Variant))
    def test_entries_are_consistent(self, variant):
        """Payout and size match the category for every entry."""
        for bet_id, config in get_registry(variant).items():
            assert config.bet_id == bet_id
            assert config.payout == config.category.payout
            assert len(config.numbers) == config.category.size

    def test_payouts(self):
        """Fixed payouts per category."""
        assert get_bet_config("num_17").payout == 35
        assert get_bet_config("split_17_20").payout == 17
        assert get_bet_config("street_1_2_3").payout == 11
        assert get_bet_config("corner_1_2_4_5").payout == 8
        assert get_bet_config("sixline_1_2_3_4_5_6").payout == 5
        assert get_bet_config("dozen_2").payout == 2
        assert get_bet_config("column_3").payout == 2
        assert get_bet_config("red").payout == 1

    def test_columns_partition_board(self):
        """The three columns cover 1-36 exactly once."""
        covered = Counter()
        for k in (1, 2, 3):
            covered.update(get_bet_config(f"column_{k}").numbers)
        assert set(covered) == set(range(1, 37))
        assert set(covered.values()) == {1}

    def test_dozens_partition_board(self):
        """The three dozens cover 1-36 exactly once."""
        numbers = [n for k in (1, 2, 3) for n in get_bet_config(f"dozen_{k}").numbers]
        assert sorted(numbers) == list(range(1, 37))

    def test_even_money_pairs_partition_board(self):
        """Red/black, even/odd and low/high each split 1-36."""
        for a, b in [("red", "black"), ("even", "odd"), ("low", "high")]:
            first = get_bet_config(a).numbers
            second = get_bet_config(b).numbers
            assert first | second == set(range(1, 37))
            assert not first & second

    def test_zero_loses_outside_bets(self):
        """Zero is covered only by inside bets."""
        for bet_id in bets_covering(0):
            assert get_bet_config(bet_id).category not in (
                BetCategory.DOZEN,
                BetCategory.COLUMN,
                BetCategory.EVEN_MONEY,
            )

    def test_bets_covering_seventeen(self):
        """17 is covered by its straight, splits, street, corners and outside bets."""
        covering = set(bets_covering(17))
        assert {"num_17", "split_16_17", "split_17_18", "split_14_17", "split_17_20"} <= covering
        assert {"street_16_17_18", "corner_13_14_16_17", "corner_17_18_20_21"} <= covering
        assert {"black", "odd", "low", "dozen_2", "column_2"} <= covering
        assert "red" not in covering


class TestLookup:
    """Tests for bet lookup and id translation."""

    def test_get_bet_config_missing(self):
        """Unknown ids return None."""
        assert get_bet_config("num_99") is None
        assert get_bet_config("split_1_5") is None

    def test_get_bet_config_idempotent(self):
        """Repeated lookups return the same entry."""
        assert get_bet_config("corner_1_2_4_5") is get_bet_config("corner_1_2_4_5")

    def test_registry_is_read_only(self):
        """Entries cannot be added, replaced or mutated."""
        registry = get_registry()
        with pytest.raises(TypeError):
            registry["num_99"] = registry["num_1"]  # type: ignore[index]
        with pytest.raises(TypeError):
            registry._entries["num_1"] = registry["num_2"]  # type: ignore[index]
        with pytest.raises(AttributeError):
            registry["num_1"].payout = 100  # type: ignore[misc]

    def test_format_bet_id_orders_numbers(self):
        """Ids list 0, then 00, then ascending numbers."""
        assert format_bet_id(BetCategory.SPLIT, [20, 17]) == "split_17_20"
        assert format_bet_id(BetCategory.SPLIT, [DOUBLE_ZERO, 0]) == "split_0_00"
        assert format_bet_id(BetCategory.STRAIGHT, [DOUBLE_ZERO]) == "num_00"

    def test_bet_id_for_tags(self):
        """Tags and selections translate to registry ids."""
        assert bet_id_for("straight", (17,)) == "num_17"
        assert bet_id_for("split", (20, 17)) == "split_17_20"
        assert bet_id_for("corner", (5, 1, 4, 2)) == "corner_1_2_4_5"
        assert bet_id_for("dozen", (3,)) == "dozen_3"
        assert bet_id_for("RED") == "red"
        assert bet_id_for("column_1") == "column_1"

    def test_bet_id_for_bad_selection(self):
        """Selections that are not on the layout are rejected."""
        with pytest.raises(UnknownSelection):
            bet_id_for("split", (1, 5))
        with pytest.raises(UnknownSelection):
            bet_id_for("straight", (37,), Variant.EUROPEAN)
        with pytest.raises(UnknownSelection):
            bet_id_for("split", (3, 3))
        with pytest.raises(UnknownSelection):
            bet_id_for("dozen", (4,))
        with pytest.raises(UnknownSelection):
            bet_id_for("red", (1,))

    def test_bet_id_for_unknown_tag(self):
        """Unknown tags with a selection are invalid bets."""
        with pytest.raises(InvalidBet):
            bet_id_for("basket", (0, 1, 2))
