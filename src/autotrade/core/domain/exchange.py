"""
Exchange — Агрегат стоимости сделки и метаданные оффера

Exchange вычисляется независимо для каждой стороны (OUR/THEIR)
при каждой сборке или оценке оффера; общий изменяемый state отсутствует.

OfferMetadata — структурированная запись {diff, dict, value, prices},
которую транспортный слой сохраняет в оффере для последующей
сверки (листинги, корректировка стока).
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from .cart import Side
from .currency import KEY_SKU, is_metal, to_refined
from .pricing import KeyPrices, PriceEntry


# =============================================================================
# EXCHANGE (per-construction / per-evaluation)
# =============================================================================


@dataclass
class ExchangeContents:
    """Флаги присутствия предметов/металла/ключей."""

    items: bool = False
    metal: bool = False
    keys: bool = False

    def mark(self, sku: str) -> None:
        if sku == KEY_SKU:
            self.keys = True
        elif is_metal(sku):
            self.metal = True
        else:
            self.items = True


@dataclass
class SideExchange:
    """Стоимость одной стороны сделки."""

    value: int = 0  # scrap-эквивалент (ключи по курсу направления)
    keys: int = 0
    scrap: int = 0
    contains: ExchangeContents = field(default_factory=ExchangeContents)


@dataclass
class Exchange:
    """Стоимость обеих сторон сделки."""

    our: SideExchange = field(default_factory=SideExchange)
    their: SideExchange = field(default_factory=SideExchange)

    def side(self, side: Side) -> SideExchange:
        return self.our if side is Side.OUR else self.their

    @property
    def contains(self) -> ExchangeContents:
        """Объединение флагов обеих сторон."""
        return ExchangeContents(
            items=self.our.contains.items or self.their.contains.items,
            metal=self.our.contains.metal or self.their.contains.metal,
            keys=self.our.contains.keys or self.their.contains.keys,
        )


# =============================================================================
# OFFER METADATA
# =============================================================================


class SideValue(BaseModel):
    """Стоимость стороны в формате метаданных: ключи + металл (refined)."""

    keys: int = Field(..., ge=0, description="Количество ключей")
    metal: float = Field(..., ge=0, description="Металл (refined)")

    model_config = {"frozen": True}


class KeyRates(BaseModel):
    """Курсы ключа на момент сделки (refined)."""

    buy: float = Field(..., gt=0, description="Курс покупки ключа (refined)")
    sell: float = Field(..., gt=0, description="Курс продажи ключа (refined)")

    model_config = {"frozen": True}


class ValueRecord(BaseModel):
    """Запись value для метаданных оффера."""

    our: SideValue
    their: SideValue
    rates: KeyRates

    model_config = {"frozen": True}

    @classmethod
    def from_exchange(cls, exchange: Exchange, key_prices: KeyPrices) -> "ValueRecord":
        return cls(
            our=SideValue(keys=exchange.our.keys, metal=to_refined(exchange.our.scrap)),
            their=SideValue(keys=exchange.their.keys, metal=to_refined(exchange.their.scrap)),
            rates=KeyRates(buy=key_prices.buy.metal, sell=key_prices.sell.metal),
        )


class ItemPrices(BaseModel):
    """Цены предмета на момент сборки оффера (refined + keys)."""

    buy: SideValue
    sell: SideValue

    model_config = {"frozen": True}

    @classmethod
    def from_entry(cls, entry: PriceEntry) -> "ItemPrices":
        return cls(
            buy=SideValue(keys=entry.buy.keys, metal=entry.buy.metal),
            sell=SideValue(keys=entry.sell.keys, metal=entry.sell.metal),
        )


class OfferMetadata(BaseModel):
    """
    Метаданные оффера для транспортного слоя.

    diff: sku → чистое изменение стока бота (+ получаем, - отдаём)
    items: {"our": sku → count, "their": sku → count} (сериализуется как "dict")
    value: стоимость сторон и курсы ключа
    """

    diff: dict[str, int] = Field(default_factory=dict, description="Чистое изменение стока по sku")
    items: dict[str, dict[str, int]] = Field(
        default_factory=lambda: {"our": {}, "their": {}},
        alias="dict",
        description="Количество по sku для каждой стороны",
    )
    value: ValueRecord | None = Field(None, description="Стоимость сторон")
    prices: dict[str, ItemPrices] | None = Field(None, description="Цены на момент сборки")
    partner: str | None = Field(None, description="Идентификатор партнёра")
    handle_timestamp: int | None = Field(None, ge=0, description="Начало обработки (ms)")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @staticmethod
    def diff_from_items(items: dict[str, dict[str, int]]) -> dict[str, int]:
        """diff = their - our по каждому sku."""
        diff: dict[str, int] = {}
        for side, sign in ((Side.OUR, -1), (Side.THEIR, 1)):
            for sku, amount in items.get(side.value, {}).items():
                diff[sku] = diff.get(sku, 0) + sign * amount
        return diff

    def to_offer_data(self) -> dict[str, object]:
        """Пары ключ → значение для offer.data(key, value); пустые поля пропускаются."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if "handle_timestamp" in data:
            data["handleTimestamp"] = data.pop("handle_timestamp")
        return data
