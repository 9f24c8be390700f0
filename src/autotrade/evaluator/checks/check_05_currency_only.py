"""CHECK 5: Офферы только из валюты

- Только металл (нет предметов и ключей) → DECLINE(ONLY_METAL)
- Ключи без предметов:
    нет записи ключа → DECLINE(NOT_TRADING_KEYS)
    бот отдаёт ключи, а intent запрещает продажу → DECLINE(NOT_TRADING_KEYS)
    бот получает ключи, а intent запрещает покупку → DECLINE(NOT_TRADING_KEYS)
    capacity(направление diff) − |diff| < 0 → DECLINE(OVERSTOCKED)
"""

from autotrade.core.domain.currency import KEY_SKU
from autotrade.evaluator.types import CheckResult, EvaluationContext, ReasonCode
from autotrade.transport.protocols import InventoryProvider


class Check05CurrencyOnly:
    """CHECK 5: обмен металла и ключей."""

    def __init__(self, inventory: InventoryProvider):
        self.inventory = inventory

    def evaluate(self, context: EvaluationContext) -> CheckResult:
        exchange = context.exchange
        contains = exchange.contains
        log = context.offer.log

        if contains.metal and not contains.keys and not contains.items:
            log("info", "only contains metal, declining...")
            return CheckResult.decline(ReasonCode.ONLY_METAL, details="metal on both sides only")

        if not contains.keys or contains.items:
            return CheckResult.passed()

        entry = context.snapshot.get(KEY_SKU)
        if entry is None:
            log("info", "we are not trading keys, declining...")
            return CheckResult.decline(ReasonCode.NOT_TRADING_KEYS, details="no key price entry")

        if exchange.our.contains.keys and not entry.allows(False):
            log("info", "we are not selling keys, declining...")
            return CheckResult.decline(ReasonCode.NOT_TRADING_KEYS, details="not selling keys")

        if exchange.their.contains.keys and not entry.allows(True):
            log("info", "we are not buying keys, declining...")
            return CheckResult.decline(ReasonCode.NOT_TRADING_KEYS, details="not buying keys")

        diff = context.diff.get(KEY_SKU, 0)
        if diff != 0:
            capacity = self.inventory.amount_can_trade(KEY_SKU, diff > 0)
            if capacity - abs(diff) < 0:
                log("info", "is taking / offering too many keys, declining...")
                return CheckResult.decline(
                    ReasonCode.OVERSTOCKED,
                    details=f"keys: capacity={capacity} implied={abs(diff)}",
                )

        return CheckResult.passed("key trade")
