"""
Money — Модель денежной суммы и константы валют

Единственный допустимый способ конверсии между:
- scrap (целое, минимальная единица металла)
- refined (отображение металла, 2 знака, усечение)
- keys (переменный курс key → scrap, задаётся извне)

Курс ключа несимметричен: buy и sell курсы различаются (см. KeyPrices).
"""

from typing import Final

from pydantic import BaseModel, Field


# =============================================================================
# SKU ВАЛЮТ
# =============================================================================

SCRAP_SKU: Final[str] = "5000;6"
RECLAIMED_SKU: Final[str] = "5001;6"
REFINED_SKU: Final[str] = "5002;6"
KEY_SKU: Final[str] = "5021;6"

# Вес металла в scrap-эквиваленте (фиксированный)
METAL_VALUES: Final[dict[str, int]] = {
    REFINED_SKU: 9,
    RECLAIMED_SKU: 3,
    SCRAP_SKU: 1,
}

# Порядок номиналов: от старшего к младшему
CURRENCY_SKUS: Final[tuple[str, ...]] = (KEY_SKU, REFINED_SKU, RECLAIMED_SKU, SCRAP_SKU)

# SKU для предметов, которые не удалось классифицировать
UNKNOWN_SKU: Final[str] = "unknown"


def is_metal(sku: str) -> bool:
    """Проверка, является ли sku металлом (scrap/reclaimed/refined)."""
    return sku in METAL_VALUES


def is_currency(sku: str) -> bool:
    """Проверка, является ли sku валютой (металл или ключ)."""
    return sku == KEY_SKU or sku in METAL_VALUES


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def to_refined(scrap: int) -> float:
    """
    Конверсия: scrap → refined.

    Усечение (не округление) до 2 знаков: 3 scrap = 0.33 ref, 6 scrap = 0.66 ref.

    Args:
        scrap: Количество scrap (может быть отрицательным)

    Returns:
        Значение в refined
    """
    sign = -1 if scrap < 0 else 1
    return sign * ((abs(scrap) * 100) // 9) / 100


def to_scrap(refined: float) -> int:
    """
    Конверсия: refined → scrap.

    Args:
        refined: Значение в refined (например 1.33)

    Returns:
        Ближайшее целое количество scrap
    """
    return round(refined * 9)


def _format_refined(refined: float) -> str:
    text = f"{refined:.2f}".rstrip("0").rstrip(".")
    return text or "0"


# =============================================================================
# MONEY MODEL
# =============================================================================


class Money(BaseModel):
    """
    Денежная сумма: целое количество ключей + целое количество scrap.

    Immutable модель (frozen=True).
    """

    keys: int = Field(0, ge=0, description="Количество ключей")
    scrap: int = Field(0, ge=0, description="Металл в scrap")

    model_config = {"frozen": True}

    @classmethod
    def from_refined(cls, keys: int = 0, metal: float = 0.0) -> "Money":
        """Создание из ключей и металла в refined (формат прайс-листа)."""
        return cls(keys=keys, scrap=to_scrap(metal))

    @classmethod
    def from_value(cls, value: int, key_rate: int | None = None) -> "Money":
        """
        Разложение scrap-эквивалента на ключи и металл.

        Args:
            value: Сумма в scrap
            key_rate: Курс ключа в scrap; None: не использовать ключи

        Returns:
            Money с максимальным целым количеством ключей
        """
        if value < 0:
            raise ValueError(f"Money value cannot be negative: {value}")
        if key_rate is None:
            return cls(keys=0, scrap=value)
        if key_rate <= 0:
            raise ValueError(f"Key rate must be positive: {key_rate}")
        return cls(keys=value // key_rate, scrap=value % key_rate)

    @property
    def metal(self) -> float:
        """Металл в refined."""
        return to_refined(self.scrap)

    def to_value(self, key_rate: int | None = None) -> int:
        """
        Сумма в scrap-эквиваленте.

        Args:
            key_rate: Курс ключа в scrap (обязателен, если keys > 0)

        Returns:
            keys * key_rate + scrap

        Raises:
            ValueError: Если есть ключи, но курс не задан
        """
        if self.keys == 0:
            return self.scrap
        if key_rate is None:
            raise ValueError("key_rate is required to convert keys to scrap")
        return self.keys * key_rate + self.scrap

    def __str__(self) -> str:
        parts = []
        if self.keys:
            parts.append(f"{self.keys} {'key' if self.keys == 1 else 'keys'}")
        if self.scrap or not parts:
            parts.append(f"{_format_refined(self.metal)} ref")
        return ", ".join(parts)
