"""
PriceEntry — Модель записи прайс-листа

Immutable Pydantic модели:
- PriceEntry: цены buy/sell и intent для одного sku
- KeyPrices: несимметричный курс ключа (buy/sell)

Источник цен (хранение, обновление) находится вне ядра; ядро получает
только снапшоты.
"""

from enum import IntEnum

from pydantic import BaseModel, Field, field_validator

from .currency import Money


# =============================================================================
# ENUMS
# =============================================================================


class Intent(IntEnum):
    """Намерение бота по sku"""

    BUY = 0
    SELL = 1
    BOTH = 2


# =============================================================================
# PRICE ENTRY
# =============================================================================


class PriceEntry(BaseModel):
    """
    Запись прайс-листа.

    buy — цена, по которой бот покупает (получает предмет).
    sell — цена, по которой бот продаёт (отдаёт предмет).
    """

    sku: str = Field(..., min_length=1, description="SKU предмета")
    name: str = Field(..., min_length=1, description="Отображаемое имя")
    buy: Money = Field(..., description="Цена покупки")
    sell: Money = Field(..., description="Цена продажи")
    intent: Intent = Field(Intent.BOTH, description="Направление торговли")
    enabled: bool = Field(True, description="Запись активна")

    model_config = {"frozen": True}

    def price(self, buying: bool) -> Money:
        """Цена в направлении сделки: buy если бот получает, sell если отдаёт."""
        return self.buy if buying else self.sell

    def allows(self, buying: bool) -> bool:
        """Разрешает ли intent торговлю в данном направлении."""
        return self.intent == Intent.BOTH or self.intent == (Intent.BUY if buying else Intent.SELL)


# =============================================================================
# KEY PRICES
# =============================================================================


class KeyPrices(BaseModel):
    """
    Курс ключа в металле.

    buy используется, когда бот покупает, sell — когда продаёт.
    """

    buy: Money = Field(..., description="Курс покупки ключа")
    sell: Money = Field(..., description="Курс продажи ключа")

    model_config = {"frozen": True}

    @field_validator("buy", "sell")
    @classmethod
    def validate_metal_only(cls, v: Money) -> Money:
        """Курс ключа выражается только в металле и должен быть положительным"""
        if v.keys != 0:
            raise ValueError("key price must be expressed in metal only")
        if v.scrap <= 0:
            raise ValueError("key price must be positive")
        return v

    def rate(self, buying: bool) -> int:
        """Курс ключа в scrap для направления сделки."""
        return (self.buy if buying else self.sell).scrap
