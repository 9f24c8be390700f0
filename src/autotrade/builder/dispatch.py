"""OfferDispatcher — проверки партнёра и отправка собранного оффера.

Последовательный async-конвейер с одной точкой ожидания на каждый
удалённый вызов:
    escrow → ban → send

Ошибки удалённых проверок (PartnerCheckError) пробрасываются вызывающему.
Ошибки отправки классифицируются таблицей SEND_ERROR_RULES.
"""

import logging

from autotrade.builder.common import BuilderConfig
from autotrade.transport.errors import TransportError, classify_send_error
from autotrade.transport.protocols import OfferSender, PartnerChecks, TradeOffer


logger = logging.getLogger(__name__)


class OfferDispatcher:
    """Отправка исходящих офферов."""

    def __init__(
        self,
        sender: OfferSender,
        checks: PartnerChecks,
        config: BuilderConfig | None = None,
    ):
        self.sender = sender
        self.checks = checks
        self.config = config or BuilderConfig()

    async def dispatch(self, offer: TradeOffer, check_partner: bool = True) -> str | None:
        """
        Отправка оффера.

        Args:
            offer: Собранный оффер
            check_partner: Выполнить проверки escrow и бана перед отправкой

        Returns:
            None при успешной отправке, иначе сообщение для партнёра

        Raises:
            PartnerCheckError: Ошибка удалённой проверки
            TransportError: Ошибка отправки, не описанная таблицей
        """
        if check_partner:
            if not self.config.accept_escrow:
                offer.log("info", "checking escrow...")
                if await self.checks.has_escrow(offer):
                    offer.log("info", "would be held if accepted, declining...")
                    return "The offer would be held by escrow"

            offer.log("info", "checking bans...")
            if await self.checks.is_banned(offer.partner):
                offer.log("info", "partner is banned in one or more communities, declining...")
                return "You are banned in one or more communities"

        try:
            await self.sender.send_offer(offer)
        except TransportError as e:
            logger.warning("Failed to send offer to %s: %s", offer.partner, e)
            return classify_send_error(e)

        return None
