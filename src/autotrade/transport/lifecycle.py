"""
Жизненный цикл оффера — реакции ядра на смену состояния

Состояния (нумерация платформы):
    Active | CreatedNeedsConfirmation → {Accepted, Declined, Canceled, InvalidItems}

Ядро не меняет состояние оффера, а только формирует реакцию:
сообщения партнёру/администраторам и список sku для пересчёта листингов.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping

from autotrade.transport.protocols import TradeOffer


logger = logging.getLogger(__name__)


class OfferState(IntEnum):
    """Состояние оффера"""

    INVALID = 1
    ACTIVE = 2
    ACCEPTED = 3
    COUNTERED = 4
    EXPIRED = 5
    CANCELED = 6
    DECLINED = 7
    INVALID_ITEMS = 8
    CREATED_NEEDS_CONFIRMATION = 9
    CANCELED_BY_SECOND_FACTOR = 10
    IN_ESCROW = 11


NO_LONGER_AVAILABLE = "Ohh nooooes! The offer is no longer available. Reason: "


@dataclass(frozen=True)
class LifecycleReaction:
    """Реакция на смену состояния оффера."""

    partner_messages: tuple[str, ...] = ()
    admin_message: str | None = None
    listing_skus: tuple[str, ...] = ()


def find_active_offer(poll_data: Mapping[str, Any], partner: str) -> str | None:
    """
    Поиск активного отправленного оффера партнёру.

    Args:
        poll_data: {"sent": {offer_id: state}, "offerData": {offer_id: {"partner": ...}}}
        partner: Идентификатор партнёра

    Returns:
        offer_id или None
    """
    offer_data = poll_data.get("offerData")
    if not offer_data:
        return None

    for offer_id, state in poll_data.get("sent", {}).items():
        if state != OfferState.ACTIVE:
            continue
        data = offer_data.get(offer_id)
        if data is None:
            continue
        if data.get("partner") == partner:
            return offer_id

    return None


def offer_changed(offer: TradeOffer, old_state: int | None) -> LifecycleReaction:
    """
    Реакция на смену состояния оффера.

    Args:
        offer: Оффер (новое состояние в offer.state)
        old_state: Предыдущее состояние

    Returns:
        LifecycleReaction
    """
    handled_by_us = offer.data("handledByUs") is True
    accepted = offer.state == OfferState.ACCEPTED

    admin_message = None
    listing_skus: tuple[str, ...] = ()
    partner_messages: list[str] = []

    if accepted:
        diff = offer.data("diff") or {}
        listing_skus = tuple(diff)
        admin_message = (
            f"Trade #{offer.id} with {offer.partner} is accepted. Summary:\n{offer.summarize()}"
        )
        logger.info("Offer %s accepted, %d listing(s) to refresh", offer.id, len(listing_skus))

    if handled_by_us:
        if offer.is_our_offer:
            if accepted:
                offer.log("trade", "has been accepted. Summary:\n" + offer.summarize())
            elif offer.state == OfferState.DECLINED:
                partner_messages.append(NO_LONGER_AVAILABLE + "The offer has been declined.")
            elif offer.state == OfferState.CANCELED:
                if old_state == OfferState.CREATED_NEEDS_CONFIRMATION:
                    partner_messages.append(NO_LONGER_AVAILABLE + "Failed to accept mobile confirmation.")
                else:
                    partner_messages.append(NO_LONGER_AVAILABLE + "The offer has been active for a while.")

        if accepted:
            partner_messages.append("Success! The offer went through successfully.")
        elif offer.state == OfferState.INVALID_ITEMS:
            partner_messages.append(
                "Ohh nooooes! Your offer is no longer available. "
                "Reason: Items not available (traded away in a different trade)."
            )

    return LifecycleReaction(
        partner_messages=tuple(partner_messages),
        admin_message=admin_message,
        listing_skus=listing_skus,
    )
