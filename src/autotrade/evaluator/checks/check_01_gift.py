"""CHECK 1: Подарки и односторонние офферы

- Бот ничего не отдаёт и сообщение оффера совпадает с gift-фразой
  (без учёта регистра) → ACCEPT(GIFT)
- Иначе, если одна из сторон пуста → DECLINE(GIFT)
"""

from autotrade.evaluator.types import CheckResult, EvaluationContext, EvaluatorConfig, ReasonCode


class Check01Gift:
    """CHECK 1: подарочный или односторонний оффер."""

    def __init__(self, config: EvaluatorConfig | None = None):
        self.config = config or EvaluatorConfig()

    def evaluate(self, context: EvaluationContext) -> CheckResult:
        offer = context.offer
        phrases = {phrase.lower() for phrase in self.config.gift_phrases}
        message = (offer.message or "").strip().lower()

        if not offer.items_to_give and message in phrases:
            offer.log("info", "is a gift offer, accepting. Summary:\n" + offer.summarize())
            return CheckResult.accept(ReasonCode.GIFT, details=f"gift phrase: {message}")

        if not offer.items_to_give or not offer.items_to_receive:
            offer.log("info", "is a gift offer, declining...")
            return CheckResult.decline(ReasonCode.GIFT, details="one side of the offer is empty")

        return CheckResult.passed()
