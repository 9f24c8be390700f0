"""Общие типы сборки офферов: конфигурация, результат, ошибки, аллокация."""

import time
from dataclasses import dataclass
from typing import Final, Sequence

from autotrade.core.contracts import validate_offer_metadata
from autotrade.core.domain.exchange import OfferMetadata
from autotrade.transport.protocols import TradeItem, TradeOffer


# Сообщение партнёру при внутренней ошибке сборки
CONSTRUCTION_FAILED_MESSAGE: Final[str] = "Something went wrong constructing the offer, try again later"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ConstructionError(Exception):
    """
    Нарушен инвариант сборки оффера (внутренний дефект).

    Логируется и показывается партнёру только как общее
    "try again later", никогда не как причина отказа.
    """
    pass


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class BuilderConfig:
    """Конфигурация сборки и отправки исходящих офферов."""

    offer_message: str = "Powered by TF2 Automatic"
    use_cache: bool = False  # Кэш инвентаря при загрузке словарей
    accept_escrow: bool = False  # Не проверять escrow перед отправкой


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class BuildResult:
    """Результат сборки оффера."""

    offer: TradeOffer | None = None
    message: str | None = None  # Терминальное сообщение партнёру (сборка прервана)
    notices: tuple[str, ...] = ()  # Промежуточные сообщения (изменения, ожидание)
    metadata: OfferMetadata | None = None

    @property
    def ok(self) -> bool:
        return self.offer is not None


# =============================================================================
# HELPERS
# =============================================================================


def now_ms() -> int:
    return int(time.time() * 1000)


def allocate(offer: TradeOffer, mine: bool, instances: Sequence[str], count: int) -> int:
    """
    Добавление до count экземпляров в оффер в порядке следования.

    Args:
        offer: Оффер
        mine: True: в сторону бота (add_my_item), иначе партнёра
        instances: Доступные instance id
        count: Требуемое количество

    Returns:
        Фактически добавленное количество
    """
    add = offer.add_my_item if mine else offer.add_their_item
    added = 0
    for assetid in instances:
        if added >= count:
            break
        if add(TradeItem(assetid=assetid)):
            added += 1
    return added


def attach_metadata(offer: TradeOffer, metadata: OfferMetadata) -> None:
    """Запись метаданных в оффер (с проверкой контракта offer_metadata)."""
    validate_offer_metadata(metadata)
    for key, value in metadata.to_offer_data().items():
        offer.data(key, value)
