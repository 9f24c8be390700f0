"""Типы оценки входящих офферов: решения, коды причин, контекст, конфигурация."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from autotrade.core.domain.cart import Side
from autotrade.core.domain.currency import UNKNOWN_SKU
from autotrade.core.domain.exchange import OfferMetadata
from autotrade.core.math.valuation import PriceSnapshot, ValueAccumulator
from autotrade.transport.protocols import TradeOffer


# =============================================================================
# ENUMS
# =============================================================================


class Action(str, Enum):
    """Решение по офферу"""

    ACCEPT = "accept"
    DECLINE = "decline"


class ReasonCode(str, Enum):
    """Код причины решения"""

    # Принятие
    GIFT = "GIFT"
    ADMIN = "ADMIN"
    VALID_OFFER = "VALID_OFFER"

    # Отклонение
    INVALID_ITEMS = "INVALID_ITEMS"
    ONLY_METAL = "ONLY_METAL"
    NOT_TRADING_KEYS = "NOT_TRADING_KEYS"
    OVERSTOCKED = "OVERSTOCKED"
    INVALID_VALUE = "INVALID_VALUE"
    ESCROW = "ESCROW"
    BANNED = "BANNED"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class EvaluatorConfig:
    """Конфигурация оценки входящих офферов."""

    admins: frozenset[str] = frozenset()
    gift_phrases: frozenset[str] = frozenset({"donate", "gift"})
    accept_escrow: bool = False  # Пропустить проверку escrow

    @classmethod
    def from_env(cls) -> "EvaluatorConfig":
        """
        Конфигурация из переменных окружения.

        ADMINS — идентификаторы администраторов через запятую
        ACCEPT_ESCROW — "true" отключает проверку escrow
        """
        admins = frozenset(a.strip() for a in os.environ.get("ADMINS", "").split(",") if a.strip())
        return cls(
            admins=admins,
            accept_escrow=os.environ.get("ACCEPT_ESCROW", "").lower() == "true",
        )


# =============================================================================
# CHECK RESULT / DECISION
# =============================================================================


@dataclass(frozen=True)
class CheckResult:
    """
    Результат одной проверки.

    resolved=False: проверка пройдена, конвейер продолжается.
    resolved=True: решение принято (action + reason).
    """

    resolved: bool
    action: Action | None = None
    reason: ReasonCode | None = None
    details: str = ""

    @property
    def block_reason(self) -> str:
        """Код причины отклонения ("" если проверка пройдена или оффер принят)."""
        if self.action is Action.DECLINE:
            return self.reason.value
        return ""

    @classmethod
    def passed(cls, details: str = "") -> "CheckResult":
        return cls(resolved=False, details=details)

    @classmethod
    def accept(cls, reason: ReasonCode, details: str = "") -> "CheckResult":
        return cls(resolved=True, action=Action.ACCEPT, reason=reason, details=details)

    @classmethod
    def decline(cls, reason: ReasonCode, details: str = "") -> "CheckResult":
        return cls(resolved=True, action=Action.DECLINE, reason=reason, details=details)


@dataclass(frozen=True)
class OfferDecision:
    """
    Итог оценки оффера.

    action=None: неопределённый результат (ошибка удалённой проверки);
    вызывающий решает, повторять ли оценку.
    """

    action: Action | None
    reason: ReasonCode | None
    details: str
    metadata: OfferMetadata | None = None
    error: Exception | None = None

    @property
    def is_indeterminate(self) -> bool:
        return self.action is None

    @classmethod
    def from_check(cls, result: CheckResult, metadata: OfferMetadata | None) -> "OfferDecision":
        return cls(action=result.action, reason=result.reason, details=result.details, metadata=metadata)


# =============================================================================
# CONTEXT
# =============================================================================


SkuResolver = Callable[[object], "str | None"]


@dataclass
class EvaluationContext:
    """
    Состояние одной оценки.

    items: сторона → sku → список экземпляров
    Каждая оценка владеет собственным accumulator; общий state ограничен
    неизменяемым снапшотом цен.
    """

    offer: TradeOffer
    items: dict[Side, dict[str, list]]
    snapshot: PriceSnapshot
    accumulator: ValueAccumulator
    diff: dict[str, int] = field(default_factory=dict)
    counts: dict[str, dict[str, int]] = field(default_factory=dict)

    @classmethod
    def build(cls, offer: TradeOffer, sku_of: SkuResolver, snapshot_factory) -> "EvaluationContext":
        """
        Группировка предметов оффера по sku и снятие снапшота цен.

        Args:
            offer: Входящий оффер
            sku_of: instance → sku (None если не распознан)
            snapshot_factory: skus → PriceSnapshot
        """
        items: dict[Side, dict[str, list]] = {Side.OUR: {}, Side.THEIR: {}}
        for side, instances in ((Side.OUR, offer.items_to_give), (Side.THEIR, offer.items_to_receive)):
            for instance in instances:
                sku = sku_of(instance) or UNKNOWN_SKU
                items[side].setdefault(sku, []).append(instance)

        counts = {side.value: {sku: len(group) for sku, group in items[side].items()} for side in Side}
        diff = OfferMetadata.diff_from_items(counts)

        snapshot = snapshot_factory(set(items[Side.OUR]) | set(items[Side.THEIR]))
        return cls(
            offer=offer,
            items=items,
            snapshot=snapshot,
            accumulator=ValueAccumulator(snapshot),
            diff=diff,
            counts=counts,
        )

    @property
    def exchange(self):
        return self.accumulator.exchange
