"""OfferEvaluator — решение accept/decline по входящему офферу

Порядок проверок (первое сработавшее правило завершает оценку):
    CHECK 0  нераспознанные предметы       → DECLINE INVALID_ITEMS
    CHECK 1  подарок / односторонний оффер → ACCEPT / DECLINE GIFT
    CHECK 2  администратор                 → ACCEPT ADMIN
    CHECK 3  оценка стоимости сторон
    CHECK 4  intent и ёмкость по предметам → DECLINE INVALID_ITEMS / OVERSTOCKED
    CHECK 5  только металл / только ключи  → DECLINE ONLY_METAL / NOT_TRADING_KEYS / OVERSTOCKED
    CHECK 6  баланс стоимости              → DECLINE INVALID_VALUE
    CHECK 7  escrow, баны (async)          → DECLINE ESCROW / BANNED, иначе ACCEPT VALID_OFFER

Метаданные записываются в оффер по мере появления:
- diff, dict — после CHECK 0
- value — после CHECK 3

Ошибка удалённой проверки в CHECK 7 → неопределённое решение (action=None),
оффер остаётся без решения для повторной оценки.
"""

import logging

from autotrade.core.contracts import validate_offer_metadata
from autotrade.core.domain.exchange import OfferMetadata, ValueRecord
from autotrade.core.math.valuation import PriceSnapshot
from autotrade.evaluator.checks import (
    Check00ItemRecognition,
    Check01Gift,
    Check02TrustedPartner,
    Check03Valuation,
    Check04ItemPolicy,
    Check05CurrencyOnly,
    Check06ValueBalance,
    Check07PartnerRisk,
)
from autotrade.evaluator.types import (
    CheckResult,
    EvaluationContext,
    EvaluatorConfig,
    OfferDecision,
    SkuResolver,
)
from autotrade.transport.errors import TransportError
from autotrade.transport.protocols import InventoryProvider, PartnerChecks, PriceProvider, TradeOffer


logger = logging.getLogger(__name__)


class OfferEvaluator:
    """Оценка входящих офферов."""

    def __init__(
        self,
        pricing: PriceProvider,
        inventory: InventoryProvider,
        checks: PartnerChecks,
        sku_of: SkuResolver,
        config: EvaluatorConfig | None = None,
    ):
        """
        Args:
            pricing: Прайс-лист (снапшот снимается в начале каждой оценки)
            inventory: Ёмкость стока бота (amount_can_trade)
            checks: Удалённые проверки партнёра
            sku_of: instance → sku (None если предмет не распознан)
            config: Конфигурация (опционально, используется default)
        """
        self.pricing = pricing
        self.sku_of = sku_of
        self.config = config or EvaluatorConfig()

        self.check00 = Check00ItemRecognition()
        self.check01 = Check01Gift(self.config)
        self.check02 = Check02TrustedPartner(self.config)
        self.check03 = Check03Valuation()
        self.check04 = Check04ItemPolicy(inventory)
        self.check05 = Check05CurrencyOnly(inventory)
        self.check06 = Check06ValueBalance()
        self.check07 = Check07PartnerRisk(checks, self.config)

    async def evaluate(self, offer: TradeOffer) -> OfferDecision:
        """
        Оценка оффера.

        Args:
            offer: Входящий оффер

        Returns:
            OfferDecision (action=None: неопределённый результат)
        """
        context = EvaluationContext.build(offer, self.sku_of, self._snapshot)

        result = self.check00.evaluate(context)
        if result.resolved:
            return self._decide(offer, result, None)

        metadata = OfferMetadata(diff=context.diff, items=context.counts)
        self._write(offer, metadata, ("diff", "dict"))

        for check in (self.check01, self.check02):
            result = check.evaluate(context)
            if result.resolved:
                return self._decide(offer, result, metadata)

        self.check03.evaluate(context)
        metadata = metadata.model_copy(
            update={"value": ValueRecord.from_exchange(context.exchange, context.snapshot.key_prices)}
        )
        self._write(offer, metadata, ("value",))

        for check in (self.check04, self.check05, self.check06):
            result = check.evaluate(context)
            if result.resolved:
                return self._decide(offer, result, metadata)

        try:
            result = await self.check07.evaluate(context)
        except TransportError as e:
            logger.warning("Failed to check partner %s for offer #%s: %s", offer.partner, offer.id, e)
            return OfferDecision(action=None, reason=None, details=str(e), metadata=metadata, error=e)

        return self._decide(offer, result, metadata)

    def _snapshot(self, skus) -> PriceSnapshot:
        return PriceSnapshot.capture(self.pricing, skus)

    @staticmethod
    def _write(offer: TradeOffer, metadata: OfferMetadata, keys: tuple[str, ...]) -> None:
        validate_offer_metadata(metadata)
        data = metadata.to_offer_data()
        for key in keys:
            offer.data(key, data[key])

    @staticmethod
    def _decide(offer: TradeOffer, result: CheckResult, metadata: OfferMetadata | None) -> OfferDecision:
        logger.info(
            "Offer #%s from %s: %s %s (%s)",
            offer.id,
            offer.partner,
            result.action.value,
            result.reason.value,
            result.details,
        )
        return OfferDecision.from_check(result, metadata)
