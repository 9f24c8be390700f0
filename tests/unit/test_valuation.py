"""
Tests for ValueAccumulator / PriceSnapshot

Покрытие:
- Металл по фиксированным весам
- Предметы по buy/sell цене в зависимости от стороны
- Ключи: цена записи ключа или курс
- Флаги contains
- Снапшот не видит изменений прайс-листа
"""

import pytest

from autotrade.core.domain.cart import Side
from autotrade.core.domain.currency import KEY_SKU, RECLAIMED_SKU, REFINED_SKU, SCRAP_SKU
from autotrade.core.math.valuation import PriceSnapshot, ValueAccumulator
from tests.fakes import FakePricing, entry, key_prices


CAPTAIN = "378;6"


@pytest.fixture
def pricing():
    return FakePricing(
        entries=[
            entry(CAPTAIN, "Team Captain", buy=1.33, sell=1.55, buy_keys=1, sell_keys=1),
            entry("200;6", "Disabled Hat", buy=1, sell=2, enabled=False),
        ],
        keys=key_prices(buy=50.0, sell=50.11),
    )


@pytest.fixture
def snapshot(pricing):
    return PriceSnapshot.capture(pricing, [CAPTAIN, "200;6", REFINED_SKU])


def test_snapshot_skips_metal_and_disabled(snapshot):
    assert snapshot.get(CAPTAIN) is not None
    assert snapshot.get("200;6") is None
    assert snapshot.get(REFINED_SKU) is None
    assert snapshot.key_rate(True) == 450
    assert snapshot.key_rate(False) == 451


def test_snapshot_is_isolated_from_price_updates(pricing, snapshot):
    pricing.entries[CAPTAIN] = entry(CAPTAIN, "Team Captain", buy=99, sell=99)
    assert snapshot.get(CAPTAIN).buy.keys == 1


def test_metal_weights(snapshot):
    acc = ValueAccumulator(snapshot)
    acc.add(Side.THEIR, REFINED_SKU, 2)
    acc.add(Side.THEIR, RECLAIMED_SKU, 1)
    acc.add(Side.THEIR, SCRAP_SKU, 4)

    their = acc.exchange.their
    assert their.value == 25
    assert their.scrap == 25
    assert their.contains.metal
    assert not their.contains.items


def test_item_uses_buy_price_on_their_side(snapshot):
    """Бот получает предмет → buy-цена по курсу покупки."""
    acc = ValueAccumulator(snapshot)
    acc.add(Side.THEIR, CAPTAIN, 2)

    their = acc.exchange.their
    assert their.value == 2 * (450 + 12)
    assert their.keys == 2
    assert their.scrap == 24
    assert their.contains.items


def test_item_uses_sell_price_on_our_side(snapshot):
    """Бот отдаёт предмет → sell-цена по курсу продажи."""
    acc = ValueAccumulator(snapshot)
    acc.add(Side.OUR, CAPTAIN, 1)
    assert acc.value(Side.OUR) == 451 + 14


def test_unpriced_item_adds_no_value(snapshot):
    acc = ValueAccumulator(snapshot)
    entry_found = acc.add(Side.THEIR, "200;6", 1)

    assert entry_found is None
    assert acc.value(Side.THEIR) == 0
    assert acc.exchange.their.contains.items


def test_keys_without_entry_valued_at_rate(snapshot):
    acc = ValueAccumulator(snapshot)
    acc.add(Side.THEIR, KEY_SKU, 2)
    acc.add(Side.OUR, KEY_SKU, 1)

    assert acc.value(Side.THEIR) == 900
    assert acc.value(Side.OUR) == 451
    assert acc.exchange.their.keys == 2
    assert acc.exchange.contains.keys


def test_keys_with_entry_valued_at_entry_price():
    pricing = FakePricing(entries=[entry(KEY_SKU, "Mann Co. Supply Crate Key", buy=49.0, sell=51.0)])
    acc = ValueAccumulator(PriceSnapshot.capture(pricing, [KEY_SKU]))
    acc.add(Side.THEIR, KEY_SKU, 1)

    assert acc.value(Side.THEIR) == 441
    assert acc.exchange.their.keys == 1
    assert acc.exchange.their.scrap == 0


def test_add_currencies(snapshot):
    acc = ValueAccumulator(snapshot)
    acc.add_currencies(Side.OUR, {KEY_SKU: 1, REFINED_SKU: 1}, buying=True)
    assert acc.value(Side.OUR) == 450 + 9


def test_negative_amount_rejected(snapshot):
    with pytest.raises(ValueError):
        ValueAccumulator(snapshot).add(Side.OUR, SCRAP_SKU, -1)
