"""CHECK 4: Политика по предметам

Для каждого предмета, не являющегося валютой:
1. Нет записи в прайс-листе или intent запрещает направление → DECLINE(INVALID_ITEMS)
2. capacity − implied < 0 → DECLINE(OVERSTOCKED)

implied — количество в направлении сделки:
    покупка (сторона THEIR): implied = diff[sku]
    продажа (сторона OUR):   implied = -diff[sku]
Если предмет есть на обеих сторонах, implied может быть <= 0.
"""

from autotrade.core.domain.cart import Side
from autotrade.core.domain.currency import is_currency
from autotrade.evaluator.types import CheckResult, EvaluationContext, ReasonCode
from autotrade.transport.protocols import InventoryProvider


class Check04ItemPolicy:
    """CHECK 4: intent и ёмкость стока по каждому sku."""

    def __init__(self, inventory: InventoryProvider):
        self.inventory = inventory

    def evaluate(self, context: EvaluationContext) -> CheckResult:
        for side in (Side.OUR, Side.THEIR):
            buying = side is Side.THEIR

            for sku in context.items[side]:
                if is_currency(sku):
                    continue

                entry = context.snapshot.get(sku)
                if entry is None or not entry.allows(buying):
                    context.offer.log("info", "contains items we are not trading, declining...")
                    return CheckResult.decline(
                        ReasonCode.INVALID_ITEMS,
                        details=f"not {'buying' if buying else 'selling'} {sku}",
                    )

                diff = context.diff.get(sku, 0)
                implied = diff if buying else -diff
                capacity = self.inventory.amount_can_trade(sku, buying)

                if capacity - implied < 0:
                    context.offer.log("info", "is taking / offering too many, declining...")
                    return CheckResult.decline(
                        ReasonCode.OVERSTOCKED,
                        details=f"{sku}: capacity={capacity} implied={implied}",
                    )

        return CheckResult.passed()
