"""Transport — контракты коллабораторов, ошибки отправки и жизненный цикл оффера.

Транспорт офферов, инвентари и прайс-лист находятся вне ядра;
здесь описаны только контракты и реакции ядра.
"""

from .errors import (
    ERESULT_NAMES,
    SEND_ERROR_RULES,
    InventoryError,
    PartnerCheckError,
    SendErrorRule,
    TransportError,
    classify_send_error,
    eresult_name,
)
from .lifecycle import LifecycleReaction, OfferState, find_active_offer, offer_changed
from .protocols import (
    APP_ID,
    CONTEXT_ID,
    InventoryProvider,
    OfferFactory,
    OfferSender,
    PartnerChecks,
    PriceProvider,
    SchemaProvider,
    TradeItem,
    TradeOffer,
)

__all__ = [
    "TransportError",
    "InventoryError",
    "PartnerCheckError",
    "SendErrorRule",
    "SEND_ERROR_RULES",
    "ERESULT_NAMES",
    "classify_send_error",
    "eresult_name",
    "OfferState",
    "LifecycleReaction",
    "find_active_offer",
    "offer_changed",
    "APP_ID",
    "CONTEXT_ID",
    "TradeItem",
    "TradeOffer",
    "OfferFactory",
    "OfferSender",
    "InventoryProvider",
    "PriceProvider",
    "SchemaProvider",
    "PartnerChecks",
]
