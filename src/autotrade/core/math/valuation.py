"""
ValueAccumulator — Подсчёт стоимости сторон сделки в scrap-эквиваленте

Правила:
- Металл: фиксированные веса (refined=9, reclaimed=3, scrap=1)
- Предметы с ценой: buy-цена если бот получает, sell-цена если отдаёт,
  ключи в цене конвертируются по курсу того же направления
- Ключи: цена из записи прайс-листа ключа, иначе курс ключа

Все расчёты выполняются над PriceSnapshot, неизменяемым снапшотом цен,
снятым один раз в начале сборки/оценки. Обновления цен во время оценки
не наблюдаются.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Protocol

from autotrade.core.domain.cart import Side
from autotrade.core.domain.currency import KEY_SKU, METAL_VALUES, is_metal
from autotrade.core.domain.exchange import Exchange
from autotrade.core.domain.pricing import KeyPrices, PriceEntry


class _PriceSource(Protocol):
    def get(self, sku: str, only_enabled: bool = ...) -> PriceEntry | None: ...

    def get_key_prices(self) -> KeyPrices: ...


# =============================================================================
# PRICE SNAPSHOT
# =============================================================================


@dataclass(frozen=True)
class PriceSnapshot:
    """Неизменяемый снапшот цен и курса ключа."""

    key_prices: KeyPrices
    entries: Mapping[str, PriceEntry]

    @classmethod
    def capture(
        cls,
        pricing: _PriceSource,
        skus: Iterable[str],
        only_enabled: bool = True,
    ) -> "PriceSnapshot":
        """
        Снятие снапшота для заданных sku (+ sku ключа).

        Args:
            pricing: Источник цен
            skus: Интересующие sku
            only_enabled: Учитывать только активные записи

        Returns:
            PriceSnapshot (отсутствующие записи не включаются)
        """
        entries: dict[str, PriceEntry] = {}
        for sku in set(skus) | {KEY_SKU}:
            if is_metal(sku):
                continue
            entry = pricing.get(sku, only_enabled)
            if entry is not None:
                entries[sku] = entry
        return cls(key_prices=pricing.get_key_prices(), entries=MappingProxyType(entries))

    def get(self, sku: str) -> PriceEntry | None:
        return self.entries.get(sku)

    def key_rate(self, buying: bool) -> int:
        return self.key_prices.rate(buying)


# =============================================================================
# VALUE ACCUMULATOR
# =============================================================================


class ValueAccumulator:
    """
    Накопитель стоимости для одной сборки/оценки.

    Владеет собственным Exchange; общий изменяемый state отсутствует.
    """

    def __init__(self, snapshot: PriceSnapshot):
        self.snapshot = snapshot
        self.exchange = Exchange()

    def add(
        self,
        side: Side,
        sku: str,
        amount: int,
        buying: bool | None = None,
    ) -> PriceEntry | None:
        """
        Добавление amount единиц sku на сторону side.

        Args:
            side: Сторона сделки
            sku: SKU предмета или валюты
            amount: Количество (>= 0)
            buying: Направление для цены/курса; по умолчанию THEIR → покупка

        Returns:
            Запись прайс-листа, если sku не металл и запись есть
        """
        if amount < 0:
            raise ValueError(f"Amount cannot be negative: {amount}")
        if buying is None:
            buying = side is Side.THEIR

        side_exchange = self.exchange.side(side)
        side_exchange.contains.mark(sku)

        if is_metal(sku):
            value = METAL_VALUES[sku] * amount
            side_exchange.value += value
            side_exchange.scrap += value
            return None

        entry = self.snapshot.get(sku)
        key_rate = self.snapshot.key_rate(buying)

        if sku == KEY_SKU:
            unit_value = entry.price(buying).to_value(key_rate) if entry is not None else key_rate
            side_exchange.value += unit_value * amount
            side_exchange.keys += amount
            return entry

        if entry is not None:
            price = entry.price(buying)
            side_exchange.value += price.to_value(key_rate) * amount
            side_exchange.scrap += price.scrap * amount
            side_exchange.keys += price.keys * amount
        return entry

    def add_currencies(self, side: Side, picked: Mapping[str, int], buying: bool | None = None) -> None:
        """Добавление подобранных номиналов (ключи + металл)."""
        for sku, count in picked.items():
            self.add(side, sku, count, buying=buying)

    def value(self, side: Side) -> int:
        return self.exchange.side(side).value
