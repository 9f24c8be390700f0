"""
CurrencySolver — Подбор номиналов под целевую сумму (making change)

Алгоритм (двухпроходный, направленный, с коррекцией переплаты):
1. Прямой проход от старшего номинала к младшему:
   берём floor(remaining / unit) единиц, но не больше доступного.
2. Если remaining > 0: обратный проход от младшего к старшему:
   берём ceil(remaining / unit) единиц (не больше неиспользованного),
   допуская переплату. Проход останавливается, как только remaining <= 0.
3. Если полный обратный проход не дал прогресса и remaining > 0,
   change = remaining (недостаточно средств).
4. Если remaining < 0, trim: от младшего номинала к старшему убираем
   целые единицы, не выводя remaining выше нуля.

Терминальные состояния:
    change == 0  → точное совпадение
    change < 0   → контрагент возвращает |change| scrap сдачи
    change > 0   → подбор невозможен (не хватает средств)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. picked[d] <= available[d] для каждого номинала
2. Только целые единицы
3. Детерминизм: одинаковые входы → одинаковый результат
"""

from dataclasses import dataclass, field
from typing import Final, Mapping, Sequence

from autotrade.core.domain.currency import (
    KEY_SKU,
    METAL_VALUES,
    RECLAIMED_SKU,
    REFINED_SKU,
    SCRAP_SKU,
)


# =============================================================================
# НОМИНАЛЫ
# =============================================================================


@dataclass(frozen=True)
class CurrencyUnit:
    """Номинал валюты и его стоимость в scrap."""

    sku: str
    value: int


METAL_UNITS: Final[tuple[CurrencyUnit, ...]] = (
    CurrencyUnit(REFINED_SKU, METAL_VALUES[REFINED_SKU]),
    CurrencyUnit(RECLAIMED_SKU, METAL_VALUES[RECLAIMED_SKU]),
    CurrencyUnit(SCRAP_SKU, METAL_VALUES[SCRAP_SKU]),
)


def currency_units(key_rate: int | None = None) -> tuple[CurrencyUnit, ...]:
    """
    Номиналы в порядке убывания стоимости.

    Args:
        key_rate: Курс ключа в scrap; None: ключи не используются
            (например, когда предметом сделки является сам ключ)

    Returns:
        (key?, refined, reclaimed, scrap)
    """
    if key_rate is None:
        return METAL_UNITS
    if key_rate <= 0:
        raise ValueError(f"Key rate must be positive: {key_rate}")
    return (CurrencyUnit(KEY_SKU, key_rate),) + METAL_UNITS


def count_holdings(holdings: Mapping[str, Sequence[str]]) -> dict[str, int]:
    """sku → список instance id  ⟶  sku → количество."""
    return {sku: len(instances) for sku, instances in holdings.items()}


def holdings_value(available: Mapping[str, int], units: Sequence[CurrencyUnit]) -> int:
    """Суммарная стоимость доступных номиналов в scrap."""
    return sum(unit.value * max(available.get(unit.sku, 0), 0) for unit in units)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class SolverResult:
    """Результат подбора номиналов."""

    picked: dict[str, int] = field(default_factory=dict)
    change: int = 0

    @property
    def is_exact(self) -> bool:
        return self.change == 0

    @property
    def is_insufficient(self) -> bool:
        return self.change > 0

    @property
    def owed_change(self) -> int:
        """Сдача, которую должен вернуть контрагент (scrap)."""
        return -self.change if self.change < 0 else 0

    def picked_value(self, units: Sequence[CurrencyUnit]) -> int:
        values = {unit.sku: unit.value for unit in units}
        return sum(values[sku] * count for sku, count in self.picked.items())


# =============================================================================
# SOLVER
# =============================================================================


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def _validate_units(units: Sequence[CurrencyUnit]) -> None:
    previous = None
    for unit in units:
        if unit.value <= 0:
            raise ValueError(f"Currency unit {unit.sku} must have positive value, got {unit.value}")
        if previous is not None and unit.value >= previous:
            raise ValueError("Currency units must be ordered by strictly descending value")
        previous = unit.value


def solve(
    target: int,
    available: Mapping[str, int],
    units: Sequence[CurrencyUnit] = METAL_UNITS,
) -> SolverResult:
    """
    Подбор номиналов под целевую сумму.

    Args:
        target: Целевая сумма в scrap (>= 0)
        available: Доступное количество по sku номинала
        units: Номиналы в порядке убывания стоимости

    Returns:
        SolverResult(picked, change)

    Raises:
        ValueError: Если target < 0 или номиналы заданы некорректно

    Examples:
        >>> solve(15, {REFINED_SKU: 2})
        SolverResult(picked={'5002;6': 2}, change=-3)
    """
    if target < 0:
        raise ValueError(f"Target value cannot be negative: {target}")
    _validate_units(units)

    picked = {unit.sku: 0 for unit in units}
    limits = {unit.sku: max(available.get(unit.sku, 0), 0) for unit in units}
    remaining = target

    # 1. Прямой проход: старший → младший, без переплаты
    for unit in units:
        if remaining <= 0:
            break
        count = min(remaining // unit.value, limits[unit.sku])
        if count > 0:
            picked[unit.sku] += count
            remaining -= count * unit.value

    # 2-3. Обратный проход: младший → старший, с переплатой
    while remaining > 0:
        progressed = False
        for unit in reversed(units):
            unused = limits[unit.sku] - picked[unit.sku]
            if unused <= 0:
                continue
            count = min(_ceil_div(remaining, unit.value), unused)
            picked[unit.sku] += count
            remaining -= count * unit.value
            progressed = True
            if remaining <= 0:
                break
        if not progressed:
            break

    # 4. Trim: убираем лишние единицы, не выводя remaining выше нуля
    if remaining < 0:
        for unit in reversed(units):
            count = min((-remaining) // unit.value, picked[unit.sku])
            if count > 0:
                picked[unit.sku] -= count
                remaining += count * unit.value

    return SolverResult(
        picked={sku: count for sku, count in picked.items() if count > 0},
        change=remaining,
    )


def max_affordable(
    unit_price: int,
    amount: int,
    available: Mapping[str, int],
    units: Sequence[CurrencyUnit] = METAL_UNITS,
) -> int:
    """
    Максимальное количество (<= amount), которое покупатель может оплатить.

    Начинает с оценки по суммарной стоимости и проверяет solver'ом.

    Args:
        unit_price: Цена одной единицы в scrap
        amount: Запрошенное количество
        available: Доступные номиналы покупателя
        units: Номиналы в порядке убывания

    Returns:
        Количество в диапазоне [0, amount]
    """
    if amount <= 0:
        return 0
    if unit_price <= 0:
        return amount

    count = min(amount, holdings_value(available, units) // unit_price)
    while count > 0 and solve(count * unit_price, available, units).is_insufficient:
        count -= 1
    return count


def make_exact_change(
    change: int,
    available: Mapping[str, int],
    units: Sequence[CurrencyUnit] = METAL_UNITS,
) -> tuple[dict[str, int], int]:
    """
    Точная сдача из металла (ключи сдачей не используются).

    Жадно от старшего номинала к младшему; для номиналов 9/3/1
    жадный выбор оптимален.

    Args:
        change: Требуемая сдача в scrap (>= 0)
        available: Доступные номиналы продавца

    Returns:
        (picked, missing): missing > 0 если точную сдачу собрать нельзя
    """
    if change < 0:
        raise ValueError(f"Change cannot be negative: {change}")

    picked: dict[str, int] = {}
    remaining = change
    for unit in units:
        if unit.sku == KEY_SKU:
            continue
        count = min(remaining // unit.value, max(available.get(unit.sku, 0), 0))
        if count > 0:
            picked[unit.sku] = count
            remaining -= count * unit.value
    return picked, remaining
