"""
Ошибки транспорта и их классификация

Таблица SEND_ERROR_RULES сопоставляет ошибки отправки оффера
(по подстроке сообщения или коду eresult) с сообщениями для партнёра.
Порядок правил значим: сначала подстроки, затем коды.
Неописанные ошибки пробрасываются без изменений.
"""

from dataclasses import dataclass
from typing import Final


# =============================================================================
# EXCEPTIONS
# =============================================================================


class TransportError(Exception):
    """Ошибка транспортного слоя (отправка, подтверждение, запросы)."""

    def __init__(self, message: str, eresult: int | None = None):
        super().__init__(message)
        self.message = message
        self.eresult = eresult


class InventoryError(TransportError):
    """Не удалось загрузить инвентарь."""


class PartnerCheckError(TransportError):
    """Не удалось выполнить удалённую проверку партнёра (escrow/ban)."""


# =============================================================================
# ERESULT
# =============================================================================

# Имена кодов результата платформы (для сообщения по умолчанию)
ERESULT_NAMES: Final[dict[int, str]] = {
    1: "OK",
    2: "Fail",
    3: "NoConnection",
    5: "InvalidPassword",
    6: "LoggedInElsewhere",
    7: "InvalidProtocolVer",
    8: "InvalidParam",
    9: "FileNotFound",
    10: "Busy",
    11: "InvalidState",
    12: "InvalidName",
    13: "InvalidEmail",
    14: "DuplicateName",
    15: "AccessDenied",
    16: "Timeout",
    17: "Banned",
    18: "AccountNotFound",
    19: "InvalidSteamID",
    20: "ServiceUnavailable",
    21: "NotLoggedOn",
    22: "Pending",
    23: "EncryptionFailure",
    24: "InsufficientPrivilege",
    25: "LimitExceeded",
    26: "Revoked",
    27: "Expired",
    28: "AlreadyRedeemed",
    29: "DuplicateRequest",
    30: "AlreadyOwned",
    84: "RateLimitExceeded",
}


def eresult_name(eresult: int) -> str:
    return ERESULT_NAMES.get(eresult, str(eresult))


# =============================================================================
# SEND ERROR TABLE
# =============================================================================

ITEM_SERVER_DOWN: Final[str] = (
    "Team Fortress 2's item server may be down or Steam may be experiencing "
    "temporary connectivity issues"
)
RECENT_BIG_OFFER: Final[str] = (
    "An error occurred while sending your trade offer, this is most likely "
    "because I've recently accepted a big offer"
)


@dataclass(frozen=True)
class SendErrorRule:
    """
    Правило классификации ошибки отправки.

    Срабатывает по подстроке в сообщении или по коду eresult.
    user_message=None: ошибка пробрасывается как есть.
    """

    user_message: str | None
    substring: str | None = None
    eresult: int | None = None

    def matches(self, error: TransportError) -> bool:
        if self.substring is not None:
            return self.substring in (error.message or "")
        return self.eresult is not None and error.eresult == self.eresult


SEND_ERROR_RULES: Final[tuple[SendErrorRule, ...]] = (
    SendErrorRule(ITEM_SERVER_DOWN, substring="We were unable to contact the game's item server"),
    SendErrorRule(None, substring="can only be sent to friends"),
    SendErrorRule(
        "I don't have space for more items in my inventory",
        substring="maximum number of items allowed in your Team Fortress 2 inventory",
    ),
    SendErrorRule(RECENT_BIG_OFFER, eresult=10),
    SendErrorRule("I don't, or you don't, have space for more items", eresult=15),
    # Платформа ещё обрабатывает предыдущий (обычно крупный) оффер
    SendErrorRule(RECENT_BIG_OFFER, eresult=16),
    SendErrorRule(ITEM_SERVER_DOWN, eresult=20),
)


def classify_send_error(error: TransportError) -> str:
    """
    Сообщение для партнёра по ошибке отправки оффера.

    Args:
        error: Ошибка транспорта

    Returns:
        Сообщение для партнёра

    Raises:
        TransportError: Исходная ошибка, если она не описана таблицей
            или правило требует проброса
    """
    for rule in SEND_ERROR_RULES:
        if rule.matches(error):
            if rule.user_message is None:
                raise error
            return rule.user_message

    if error.eresult is not None:
        return f"An error occurred while sending the offer ({eresult_name(error.eresult)})"

    raise error
