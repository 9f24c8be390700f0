"""
Tests for CurrencySolver

Покрытие:
- Точное совпадение (change == 0)
- Переплата и сдача (change < 0), trim
- Недостаточно средств (change > 0)
- picked[d] <= available[d]
- Детерминизм
- max_affordable / make_exact_change
"""

import pytest

from autotrade.core.domain.currency import KEY_SKU, RECLAIMED_SKU, REFINED_SKU, SCRAP_SKU
from autotrade.core.math.currency_solver import (
    METAL_UNITS,
    CurrencyUnit,
    count_holdings,
    currency_units,
    holdings_value,
    make_exact_change,
    max_affordable,
    solve,
)


KEY_RATE = 450  # 50 ref


@pytest.fixture
def wallet():
    """Типичный набор металла покупателя."""
    return {REFINED_SKU: 5, RECLAIMED_SKU: 2, SCRAP_SKU: 2}


# =============================================================================
# EXACT
# =============================================================================


class TestExact:
    """Сумма точно выражается доступными номиналами."""

    @pytest.mark.parametrize("target", [0, 1, 3, 9, 14, 20, 53])
    def test_exact_targets(self, wallet, target):
        result = solve(target, wallet)

        assert result.change == 0
        assert result.is_exact
        assert result.picked_value(METAL_UNITS) == target

    def test_zero_target_picks_nothing(self, wallet):
        result = solve(0, wallet)
        assert result.picked == {}
        assert result.change == 0

    def test_forward_pass_prefers_larger_units(self, wallet):
        """13 scrap = 1 refined + 1 reclaimed + 1 scrap."""
        result = solve(13, wallet)
        assert result.picked == {REFINED_SKU: 1, RECLAIMED_SKU: 1, SCRAP_SKU: 1}

    def test_keys_used_when_rate_given(self):
        units = currency_units(KEY_RATE)
        result = solve(KEY_RATE + 9, {KEY_SKU: 2, REFINED_SKU: 3}, units)

        assert result.picked == {KEY_SKU: 1, REFINED_SKU: 1}
        assert result.change == 0


# =============================================================================
# CHANGE (OVERPAY)
# =============================================================================


class TestChange:
    """Переплата: контрагент возвращает сдачу."""

    def test_two_refined_for_fifteen_scrap(self):
        """Один refined, затем второй с переплатой: сдача 3 scrap."""
        result = solve(15, {REFINED_SKU: 2})

        assert result.picked == {REFINED_SKU: 2}
        assert result.change == -3
        assert result.owed_change == 3
        assert not result.is_insufficient

    def test_trim_drops_surplus_small_units(self):
        """
        target=10, {refined:2, scrap:5}:
        прямой проход: 1 refined + 1 scrap = 10 → точное совпадение.
        """
        result = solve(10, {REFINED_SKU: 2, SCRAP_SKU: 5})
        assert result.picked == {REFINED_SKU: 1, SCRAP_SKU: 1}
        assert result.change == 0

    def test_reverse_pass_small_units_first(self):
        """
        target=5, {refined:1, reclaimed:1, scrap:1}:
        прямой: reclaimed (3) + scrap (1) → remaining 1
        обратный: refined (9) → remaining -8
        trim: scrap (-8 → -7), reclaimed (-7 → -4)
        """
        result = solve(5, {REFINED_SKU: 1, RECLAIMED_SKU: 1, SCRAP_SKU: 1})

        assert result.picked == {REFINED_SKU: 1}
        assert result.change == -4

    def test_key_overpay_returns_metal_change(self):
        units = currency_units(KEY_RATE)
        result = solve(KEY_RATE - 9, {KEY_SKU: 1}, units)

        assert result.picked == {KEY_SKU: 1}
        assert result.owed_change == 9


# =============================================================================
# INSUFFICIENT
# =============================================================================


class TestInsufficient:
    """Недостаточно средств."""

    def test_target_above_holdings(self, wallet):
        total = holdings_value(wallet, METAL_UNITS)
        result = solve(total + 4, wallet)

        assert result.is_insufficient
        assert result.change == 4
        assert result.picked == wallet

    def test_empty_wallet(self):
        result = solve(7, {})
        assert result.change == 7
        assert result.picked == {}

    def test_negative_target_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            solve(-1, {REFINED_SKU: 1})


# =============================================================================
# INVARIANTS
# =============================================================================


@pytest.mark.parametrize(
    "target,available",
    [
        (15, {REFINED_SKU: 2}),
        (26, {REFINED_SKU: 1, RECLAIMED_SKU: 10, SCRAP_SKU: 1}),
        (100, {REFINED_SKU: 3, RECLAIMED_SKU: 3, SCRAP_SKU: 3}),
        (4, {SCRAP_SKU: 2, RECLAIMED_SKU: 2}),
        (8, {RECLAIMED_SKU: 5}),
    ],
)
def test_never_picks_more_than_available(target, available):
    """picked[d] <= available[d] для каждого номинала."""
    result = solve(target, available)
    for sku, count in result.picked.items():
        assert count <= available.get(sku, 0)


def test_deterministic(wallet):
    """Одинаковые входы → одинаковый результат."""
    assert solve(31, wallet) == solve(31, wallet)


def test_units_must_be_descending():
    units = (CurrencyUnit(SCRAP_SKU, 1), CurrencyUnit(REFINED_SKU, 9))
    with pytest.raises(ValueError, match="descending"):
        solve(9, {REFINED_SKU: 1}, units)


def test_currency_units_rejects_bad_rate():
    with pytest.raises(ValueError):
        currency_units(0)


def test_count_holdings():
    assert count_holdings({REFINED_SKU: ["a", "b"], SCRAP_SKU: []}) == {REFINED_SKU: 2, SCRAP_SKU: 0}


# =============================================================================
# MAX AFFORDABLE / EXACT CHANGE
# =============================================================================


class TestMaxAffordable:
    def test_full_amount(self, wallet):
        assert max_affordable(9, 3, wallet) == 3

    def test_limited_by_holdings(self, wallet):
        """53 scrap в кошельке, цена 20 → 2 штуки."""
        assert max_affordable(20, 5, wallet) == 2

    def test_nothing_affordable(self):
        assert max_affordable(10, 2, {SCRAP_SKU: 9}) == 0

    def test_zero_amount(self, wallet):
        assert max_affordable(9, 0, wallet) == 0


class TestMakeExactChange:
    def test_greedy_change(self):
        picked, missing = make_exact_change(13, {REFINED_SKU: 2, RECLAIMED_SKU: 2, SCRAP_SKU: 2})
        assert picked == {REFINED_SKU: 1, RECLAIMED_SKU: 1, SCRAP_SKU: 1}
        assert missing == 0

    def test_missing_small_units(self):
        picked, missing = make_exact_change(4, {REFINED_SKU: 1, RECLAIMED_SKU: 1})
        assert picked == {RECLAIMED_SKU: 1}
        assert missing == 1

    def test_keys_never_used_as_change(self):
        picked, missing = make_exact_change(9, {KEY_SKU: 5, REFINED_SKU: 1}, currency_units(KEY_RATE))
        assert picked == {REFINED_SKU: 1}
        assert missing == 0
