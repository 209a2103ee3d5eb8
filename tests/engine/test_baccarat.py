"""Tests for baccarat dealing and settlement."""

from decimal import Decimal
from random import Random

import pytest
from hypothesis import given, settings, strategies as st

from settlement.baccarat import (
    BaccaratRound,
    BetSide,
    deal_round,
    hand_value,
    play_round,
    settle_bet,
    should_banker_draw,
    should_player_draw,
)
from settlement.cards import build_shoe
from settlement.errors import InvalidBet


def _round(winner: BetSide) -> BaccaratRound:
    """A dealt round with the given winner; the cards do not matter for settlement."""
    return BaccaratRound(
        player_hand=(),
        banker_hand=(),
        player_value=0,
        banker_value=0,
        winner=winner,
        is_natural=False,
        player_third_card_value=None,
        banker_drew_third_card=False,
    )


class TestHandValue:
    """Tests for baccarat hand values."""

    def test_value_is_modulo_ten(self, make_cards):
        """Totals drop the tens digit."""
        assert hand_value(make_cards("7S", "8H")) == 5
        assert hand_value(make_cards("KS", "QH")) == 0
        assert hand_value(make_cards("AS", "9H")) == 0
        assert hand_value(make_cards("AS", "8H")) == 9

    def test_player_draw_rule(self):
        """Player draws on 0-5 and stands on 6-7."""
        assert all(should_player_draw(v) for v in range(6))
        assert not should_player_draw(6)
        assert not should_player_draw(7)


class TestBankerTable:
    """Tests for the banker's third-card table."""

    # banker total -> player third-card values on which the banker draws
    DRAWS_ON = {
        0: set(range(10)),
        1: set(range(10)),
        2: set(range(10)),
        3: set(range(10)) - {8},
        4: set(range(2, 8)),
        5: set(range(4, 8)),
        6: {6, 7},
        7: set(),
    }

    @pytest.mark.parametrize("banker_value", range(8))
    def test_table_after_player_draws(self, banker_value):
        """Banker action depends on the player's third card."""
        for third in range(10):
            expected = third in self.DRAWS_ON[banker_value]
            assert should_banker_draw(banker_value, third) is expected

    def test_banker_draws_on_five_or_less_when_player_stands(self):
        """With no player third card the banker draws on 0-5."""
        for banker_value in range(6):
            assert should_banker_draw(banker_value, None)
        assert not should_banker_draw(6, None)
        assert not should_banker_draw(7, None)

    def test_table_is_pure(self):
        """Same inputs always give the same answer."""
        for banker_value in range(8):
            for third in [None, *range(10)]:
                first = should_banker_draw(banker_value, third)
                assert all(should_banker_draw(banker_value, third) == first for _ in range(3))


class TestDealRound:
    """Tests for dealing from a stacked shoe."""

    def test_deal_order_is_player_banker_alternating(self, stacked_shoe):
        """Cards go Player, Banker, Player, Banker."""
        dealt = deal_round(stacked_shoe("9S", "2H", "KS", "3D"))
        assert [str(c) for c in dealt.player_hand] == ["9♠", "K♠"]
        assert [str(c) for c in dealt.banker_hand] == ["2♥", "3♦"]

    def test_natural_stops_drawing(self, stacked_shoe):
        """A natural 8 or 9 ends the round after two cards each."""
        dealt = deal_round(stacked_shoe("9S", "2H", "KS", "3D", "5C", "5H"))
        assert dealt.is_natural
        assert dealt.player_value == 9
        assert dealt.banker_value == 5
        assert len(dealt.player_hand) == 2
        assert len(dealt.banker_hand) == 2
        assert dealt.winner == BetSide.PLAYER

    def test_player_draws_banker_stands_on_seven(self, stacked_shoe):
        """Player on 5 draws; banker on 7 stands."""
        dealt = deal_round(stacked_shoe("2S", "10H", "3S", "7H", "4C"))
        assert len(dealt.player_hand) == 3
        assert dealt.player_third_card_value == 4
        assert dealt.player_value == 9
        assert not dealt.banker_drew_third_card
        assert dealt.winner == BetSide.PLAYER

    def test_banker_draws_when_player_stands(self, stacked_shoe):
        """Player stands on 7; banker on 5 draws."""
        dealt = deal_round(stacked_shoe("7S", "3H", "KS", "2H", "AC"))
        assert dealt.player_third_card_value is None
        assert dealt.banker_drew_third_card
        assert dealt.banker_value == 6
        assert dealt.winner == BetSide.PLAYER

    def test_banker_three_stands_on_player_eight(self, stacked_shoe):
        """Banker on 3 does not draw against a player third card of 8."""
        dealt = deal_round(stacked_shoe("2S", "3H", "2C", "KH", "8D", "9D"))
        assert dealt.player_third_card_value == 8
        assert dealt.player_value == 2
        assert not dealt.banker_drew_third_card
        assert dealt.winner == BetSide.BANKER

    def test_tie(self, stacked_shoe):
        """Equal totals tie."""
        dealt = deal_round(stacked_shoe("KS", "QH", "7S", "7H"))
        assert dealt.player_value == dealt.banker_value == 7
        assert dealt.winner == BetSide.TIE

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1))
    @settings(max_examples=200)
    def test_round_invariants(self, seed):
        """Values stay in 0-9 and naturals never draw."""
        shoe = build_shoe(8, rng=Random(seed))
        dealt = deal_round(shoe)
        assert 0 <= dealt.player_value <= 9
        assert 0 <= dealt.banker_value <= 9
        assert 2 <= len(dealt.player_hand) <= 3
        assert 2 <= len(dealt.banker_hand) <= 3
        if dealt.is_natural:
            assert len(dealt.player_hand) == 2
            assert len(dealt.banker_hand) == 2
        assert shoe.cards_dealt == len(dealt.player_hand) + len(dealt.banker_hand)


class TestSettleBet:
    """Tests for bet settlement."""

    def test_player_win_pays_even_money(self):
        """Player bet of 100 on a player win nets 100."""
        s = settle_bet(_round(BetSide.PLAYER), 100, "player")
        assert s.net_profit == Decimal("100.00")
        assert s.payout_multiplier == Decimal("1")
        assert not s.pushed

    def test_banker_win_pays_less_commission(self):
        """Banker bet of 100 nets 95.00 with 5.00 commission."""
        s = settle_bet(_round(BetSide.BANKER), 100, BetSide.BANKER)
        assert s.net_profit == Decimal("95.00")
        assert s.commission_paid == Decimal("5.00")
        assert s.payout_multiplier == Decimal("0.95")

    def test_commission_rounds_half_up(self):
        """Commission is rounded to cents."""
        s = settle_bet(_round(BetSide.BANKER), "0.10", BetSide.BANKER)
        assert s.commission_paid == Decimal("0.01")
        assert s.net_profit == Decimal("0.09")

    def test_tie_pays_eight_to_one(self):
        """Tie bet of 100 on a tie nets 800."""
        s = settle_bet(_round(BetSide.TIE), 100, "TIE")
        assert s.net_profit == Decimal("800.00")

    @pytest.mark.parametrize("side", [BetSide.PLAYER, BetSide.BANKER])
    def test_tie_pushes_player_and_banker(self, side):
        """Player and Banker bets are returned on a tie."""
        s = settle_bet(_round(BetSide.TIE), 100, side)
        assert s.pushed
        assert s.net_profit == Decimal("0.00")
        assert s.payout_multiplier == Decimal("0")

    @pytest.mark.parametrize(
        "winner,side",
        [
            (BetSide.BANKER, BetSide.PLAYER),
            (BetSide.PLAYER, BetSide.BANKER),
            (BetSide.PLAYER, BetSide.TIE),
            (BetSide.BANKER, BetSide.TIE),
        ],
    )
    def test_losing_bets_lose_stake(self, winner, side):
        """A losing bet nets minus the stake."""
        s = settle_bet(_round(winner), 100, side)
        assert s.net_profit == Decimal("-100")
        assert s.payout_multiplier == Decimal("-1")

    @pytest.mark.parametrize("amount", [0, -5, "abc", "NaN", "Infinity", "0.004", "1e30"])
    def test_invalid_amount(self, amount):
        """Non-positive, sub-cent, oversized or non-numeric amounts are rejected."""
        with pytest.raises(InvalidBet):
            settle_bet(_round(BetSide.PLAYER), amount, BetSide.PLAYER)

    def test_unknown_bet_type(self):
        """Unknown sides are rejected."""
        with pytest.raises(InvalidBet):
            settle_bet(_round(BetSide.PLAYER), 100, "dragon")


class TestPlayRound:
    """Tests for dealing and settling together."""

    def test_invalid_bet_deals_no_cards(self, rng):
        """A rejected bet leaves the shoe untouched."""
        shoe = build_shoe(6, rng=rng)
        with pytest.raises(InvalidBet):
            play_round(shoe, 0, BetSide.PLAYER)
        assert shoe.cards_dealt == 0

    def test_play_round_combines_deal_and_settlement(self, stacked_shoe):
        """The result carries the cards and the settlement."""
        result = play_round(stacked_shoe("9S", "2H", "KS", "3D"), 50, "player", round_id=4)
        assert result.round_id == 4
        assert result.winner == BetSide.PLAYER
        assert result.bet_type == BetSide.PLAYER
        assert result.net_profit == Decimal("50.00")
        assert len(result.player_hand) == 2
