"""CHECK 6: Баланс стоимости

Стоимость, отдаваемая ботом, не должна превышать получаемую.
"""

from autotrade.core.domain.cart import Side
from autotrade.evaluator.types import CheckResult, EvaluationContext, ReasonCode


class Check06ValueBalance:
    """CHECK 6: our.value <= their.value."""

    def evaluate(self, context: EvaluationContext) -> CheckResult:
        our = context.accumulator.value(Side.OUR)
        their = context.accumulator.value(Side.THEIR)

        if our > their:
            context.offer.log("info", "is not offering enough, declining...")
            return CheckResult.decline(
                ReasonCode.INVALID_VALUE,
                details=f"giving {our} scrap for {their} scrap",
            )
        return CheckResult.passed(f"giving {our} scrap for {their} scrap")
