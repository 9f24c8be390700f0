"""CHECK 7: Риски партнёра (escrow, баны)

Единственная async-проверка конвейера. Два последовательных удалённых
вызова:
1. has_escrow(offer) → DECLINE(ESCROW) (пропускается при accept_escrow)
2. is_banned(partner) → DECLINE(BANNED)
Иначе → ACCEPT(VALID_OFFER).

Ошибки удалённых вызовов (PartnerCheckError, TransportError) не
перехватываются: решение остаётся неопределённым на уровне конвейера.
"""

from autotrade.evaluator.types import CheckResult, EvaluationContext, EvaluatorConfig, ReasonCode
from autotrade.transport.protocols import PartnerChecks


class Check07PartnerRisk:
    """CHECK 7: escrow и баны партнёра."""

    def __init__(self, checks: PartnerChecks, config: EvaluatorConfig | None = None):
        self.checks = checks
        self.config = config or EvaluatorConfig()

    async def evaluate(self, context: EvaluationContext) -> CheckResult:
        offer = context.offer

        if not self.config.accept_escrow:
            offer.log("info", "checking escrow...")
            if await self.checks.has_escrow(offer):
                offer.log("info", "would be held if accepted, declining...")
                return CheckResult.decline(ReasonCode.ESCROW, details="trade would be held")

        offer.log("info", "checking bans...")
        if await self.checks.is_banned(offer.partner):
            offer.log("info", "partner is banned in one or more communities, declining...")
            return CheckResult.decline(ReasonCode.BANNED, details=f"{offer.partner} is banned")

        offer.log("trade", "accepting. Summary:\n" + offer.summarize())
        return CheckResult.accept(ReasonCode.VALID_OFFER, details="valid offer")
