"""Checks — отдельные проверки конвейера OfferEvaluator.

- CHECK 0: распознавание предметов
- CHECK 1: подарки и односторонние офферы
- CHECK 2: администраторы
- CHECK 3: оценка стоимости сторон
- CHECK 4: intent и ёмкость по предметам
- CHECK 5: офферы только из металла/ключей
- CHECK 6: баланс стоимости
- CHECK 7: escrow и баны (async)
"""

from .check_00_item_recognition import Check00ItemRecognition
from .check_01_gift import Check01Gift
from .check_02_trusted_partner import Check02TrustedPartner
from .check_03_valuation import Check03Valuation
from .check_04_item_policy import Check04ItemPolicy
from .check_05_currency_only import Check05CurrencyOnly
from .check_06_value_balance import Check06ValueBalance
from .check_07_partner_risk import Check07PartnerRisk

__all__ = [
    "Check00ItemRecognition",
    "Check01Gift",
    "Check02TrustedPartner",
    "Check03Valuation",
    "Check04ItemPolicy",
    "Check05CurrencyOnly",
    "Check06ValueBalance",
    "Check07PartnerRisk",
]
