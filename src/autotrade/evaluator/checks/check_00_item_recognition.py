"""CHECK 0: Распознавание предметов

Каждый предмет оффера должен иметь sku. Нераспознанный предмет
(UNKNOWN_SKU) на любой стороне → DECLINE(INVALID_ITEMS) до любых
остальных проверок, включая подарки и администраторов.
"""

from autotrade.core.domain.cart import Side
from autotrade.core.domain.currency import UNKNOWN_SKU
from autotrade.evaluator.types import CheckResult, EvaluationContext, ReasonCode


class Check00ItemRecognition:
    """CHECK 0: все предметы распознаны."""

    def evaluate(self, context: EvaluationContext) -> CheckResult:
        for side in (Side.OUR, Side.THEIR):
            unknown = len(context.items[side].get(UNKNOWN_SKU, ()))
            if unknown:
                context.offer.log("info", "contains items not from TF2, declining...")
                return CheckResult.decline(
                    ReasonCode.INVALID_ITEMS,
                    details=f"{unknown} unidentified item(s) on {side.value} side",
                )
        return CheckResult.passed("all items identified")
