"""
Контракты внешних коллабораторов ядра

Ядро не реализует транспорт офферов, инвентари и прайс-лист — только
потребляет их через эти протоколы:
- TradeOffer / OfferFactory / OfferSender — транспорт офферов
- InventoryProvider — инвентари (свой и партнёров)
- PriceProvider — прайс-лист и курс ключа
- SchemaProvider — каталог имён предметов
- PartnerChecks — удалённые проверки escrow и банов
"""

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from autotrade.core.domain.pricing import KeyPrices, PriceEntry


# Приложение и контекст инвентаря игры
APP_ID = 440
CONTEXT_ID = "2"


@dataclass(frozen=True)
class TradeItem:
    """Один экземпляр предмета в оффере."""

    assetid: str
    appid: int = APP_ID
    contextid: str = CONTEXT_ID
    amount: int = 1


# =============================================================================
# TRANSPORT
# =============================================================================


class TradeOffer(Protocol):
    """Оффер транспортного слоя (владелец — транспорт)."""

    id: str | None
    partner: str
    message: str
    items_to_give: Sequence[Any]
    items_to_receive: Sequence[Any]
    state: int
    is_our_offer: bool

    def add_my_item(self, item: TradeItem) -> bool: ...

    def add_their_item(self, item: TradeItem) -> bool: ...

    def data(self, key: str, *value: Any) -> Any:
        """data(key): чтение метаданных, data(key, value): запись."""
        ...

    def set_message(self, message: str) -> None: ...

    def summarize(self) -> str: ...

    def log(self, level: str, message: str) -> None: ...


class OfferFactory(Protocol):
    def create_offer(self, partner: str) -> TradeOffer: ...


class OfferSender(Protocol):
    async def send_offer(self, offer: TradeOffer) -> None:
        """Отправка оффера; ошибки: TransportError."""
        ...


# =============================================================================
# INVENTORY / PRICING / SCHEMA
# =============================================================================


class InventoryProvider(Protocol):
    async def get_dictionary(self, party: str, use_cache: bool = False) -> Mapping[str, Sequence[str]]:
        """sku → список instance id; ошибки загрузки: InventoryError."""
        ...

    def amount_can_trade(self, sku: str, buying: bool) -> int:
        """Оставшаяся ёмкость бота по sku в направлении сделки."""
        ...

    def get_amount(self, sku: str) -> int:
        """Количество sku в инвентаре бота."""
        ...

    def find_by_sku(self, sku: str) -> Sequence[str]:
        """Instance id предметов бота по sku (доступные для сделки)."""
        ...


class PriceProvider(Protocol):
    def get(self, sku: str, only_enabled: bool = False) -> PriceEntry | None: ...

    def get_key_prices(self) -> KeyPrices: ...


class SchemaProvider(Protocol):
    def get_name(self, sku: str) -> str: ...


# =============================================================================
# REMOTE CHECKS
# =============================================================================


class PartnerChecks(Protocol):
    async def has_escrow(self, offer: TradeOffer) -> bool:
        """True если оффер будет удержан escrow; ошибки: PartnerCheckError."""
        ...

    async def is_banned(self, partner: str) -> bool:
        """True если партнёр забанен; ошибки: PartnerCheckError."""
        ...
