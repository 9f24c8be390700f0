"""
Domain models and value objects.

Contains fundamental domain entities like Money, PriceEntry, Cart, Exchange.
"""

from autotrade.core.domain.cart import Cart, CartLine, Side
from autotrade.core.domain.currency import (
    CURRENCY_SKUS,
    KEY_SKU,
    METAL_VALUES,
    RECLAIMED_SKU,
    REFINED_SKU,
    SCRAP_SKU,
    UNKNOWN_SKU,
    Money,
    is_currency,
    is_metal,
    to_refined,
    to_scrap,
)
from autotrade.core.domain.exchange import (
    Exchange,
    ExchangeContents,
    ItemPrices,
    KeyRates,
    OfferMetadata,
    SideExchange,
    SideValue,
    ValueRecord,
)
from autotrade.core.domain.pricing import Intent, KeyPrices, PriceEntry

__all__ = [
    # Currency module
    "SCRAP_SKU",
    "RECLAIMED_SKU",
    "REFINED_SKU",
    "KEY_SKU",
    "UNKNOWN_SKU",
    "METAL_VALUES",
    "CURRENCY_SKUS",
    "Money",
    "is_currency",
    "is_metal",
    "to_refined",
    "to_scrap",
    # Pricing
    "Intent",
    "PriceEntry",
    "KeyPrices",
    # Cart
    "Cart",
    "CartLine",
    "Side",
    # Exchange
    "Exchange",
    "ExchangeContents",
    "SideExchange",
    "SideValue",
    "KeyRates",
    "ValueRecord",
    "ItemPrices",
    "OfferMetadata",
]
