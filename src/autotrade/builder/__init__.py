"""Builder — сборка исходящих офферов (прямой запрос и корзина) и их отправка."""

from .checkout import CartCheckout, altered_message
from .common import (
    CONSTRUCTION_FAILED_MESSAGE,
    BuilderConfig,
    BuildResult,
    ConstructionError,
)
from .direct import OfferBuilder, OfferRequest
from .dispatch import OfferDispatcher

__all__ = [
    "OfferBuilder",
    "OfferRequest",
    "CartCheckout",
    "OfferDispatcher",
    "BuilderConfig",
    "BuildResult",
    "ConstructionError",
    "CONSTRUCTION_FAILED_MESSAGE",
    "altered_message",
]
