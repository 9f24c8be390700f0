"""
Contract Validation Module

Валидация JSON контракта метаданных оффера на границе ядра.
"""

from .validators import (
    CONTRACTS,
    OFFER_METADATA,
    ContractRegistry,
    offer_metadata_errors,
    validate_offer_metadata,
)

__all__ = [
    "ContractRegistry",
    "CONTRACTS",
    "OFFER_METADATA",
    "validate_offer_metadata",
    "offer_metadata_errors",
]
