"""CHECK 2: Администратор

Офферы от администраторов принимаются без оценки стоимости.
"""

from autotrade.evaluator.types import CheckResult, EvaluationContext, EvaluatorConfig, ReasonCode


class Check02TrustedPartner:
    """CHECK 2: партнёр из списка администраторов."""

    def __init__(self, config: EvaluatorConfig | None = None):
        self.config = config or EvaluatorConfig()

    def evaluate(self, context: EvaluationContext) -> CheckResult:
        offer = context.offer
        if str(offer.partner) in self.config.admins:
            offer.log("info", "is from an admin, accepting. Summary:\n" + offer.summarize())
            return CheckResult.accept(ReasonCode.ADMIN, details=f"admin {offer.partner}")
        return CheckResult.passed()
