"""
In-memory коллабораторы для тестов

Реализуют протоколы autotrade.transport.protocols без сети:
FakeOffer, FakeOfferFactory, FakeSender, FakeInventory, FakePricing,
FakeSchema, FakeChecks.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from autotrade.core.domain.currency import Money
from autotrade.core.domain.pricing import Intent, KeyPrices, PriceEntry
from autotrade.transport.errors import InventoryError, PartnerCheckError, TransportError
from autotrade.transport.protocols import TradeItem


BOT_ID = "76561198000000001"
PARTNER_ID = "76561198000000002"
ADMIN_ID = "76561198000000003"


# =============================================================================
# PRICES
# =============================================================================


def entry(
    sku: str,
    name: str,
    buy: float,
    sell: float,
    intent: Intent = Intent.BOTH,
    enabled: bool = True,
    buy_keys: int = 0,
    sell_keys: int = 0,
) -> PriceEntry:
    """Запись прайс-листа; цены в refined."""
    return PriceEntry(
        sku=sku,
        name=name,
        buy=Money.from_refined(buy_keys, buy),
        sell=Money.from_refined(sell_keys, sell),
        intent=intent,
        enabled=enabled,
    )


def key_prices(buy: float = 50.0, sell: float = 50.11) -> KeyPrices:
    return KeyPrices(buy=Money.from_refined(0, buy), sell=Money.from_refined(0, sell))


class FakePricing:
    def __init__(self, entries: list[PriceEntry] | None = None, keys: KeyPrices | None = None):
        self.entries = {e.sku: e for e in entries or []}
        self.keys = keys or key_prices()

    def get(self, sku: str, only_enabled: bool = False) -> PriceEntry | None:
        found = self.entries.get(sku)
        if found is None or (only_enabled and not found.enabled):
            return None
        return found

    def get_key_prices(self) -> KeyPrices:
        return self.keys


class FakeSchema:
    def __init__(self, names: dict[str, str] | None = None):
        self.names = names or {}

    def get_name(self, sku: str) -> str:
        return self.names.get(sku, sku)


# =============================================================================
# INVENTORY
# =============================================================================


def instances(prefix: str, count: int) -> list[str]:
    """Список instance id: prefix-0, prefix-1, ..."""
    return [f"{prefix}-{i}" for i in range(count)]


class FakeInventory:
    """
    Инвентари бота и партнёров.

    capacity: sku → (ёмкость покупки, ёмкость продажи); по умолчанию default_capacity.
    """

    def __init__(
        self,
        dictionaries: dict[str, dict[str, list[str]]] | None = None,
        capacity: dict[str, tuple[int, int]] | None = None,
        default_capacity: int = 10,
        bot_id: str = BOT_ID,
        failing: set[str] | None = None,
    ):
        self.dictionaries = dictionaries or {}
        self.capacity = capacity or {}
        self.default_capacity = default_capacity
        self.bot_id = bot_id
        self.failing = failing or set()
        self.loads: list[tuple[str, bool]] = []
        self.gate: asyncio.Event | None = None  # get_dictionary ждёт, пока gate не выставлен

    async def get_dictionary(self, party: str, use_cache: bool = False) -> dict[str, list[str]]:
        self.loads.append((party, use_cache))
        if self.gate is not None:
            await self.gate.wait()
        if party in self.failing:
            raise InventoryError(f"Failed to load inventory of {party}")
        return self.dictionaries.get(party, {})

    def amount_can_trade(self, sku: str, buying: bool) -> int:
        buy, sell = self.capacity.get(sku, (self.default_capacity, self.default_capacity))
        return buy if buying else sell

    def get_amount(self, sku: str) -> int:
        return len(self.find_by_sku(sku))

    def find_by_sku(self, sku: str) -> list[str]:
        return self.dictionaries.get(self.bot_id, {}).get(sku, [])


# =============================================================================
# OFFERS
# =============================================================================


@dataclass(frozen=True)
class Item:
    """Экземпляр предмета во входящем оффере (sku известен заранее)."""

    assetid: str
    sku: str | None


def items(sku: str | None, count: int, prefix: str = "") -> list[Item]:
    return [Item(assetid=f"{prefix or sku}-{i}", sku=sku) for i in range(count)]


def sku_of(item: Item) -> str | None:
    return item.sku


@dataclass
class FakeOffer:
    partner: str = PARTNER_ID
    message: str = ""
    items_to_give: list[Any] = field(default_factory=list)
    items_to_receive: list[Any] = field(default_factory=list)
    id: str | None = "1001"
    state: int = 2
    is_our_offer: bool = False
    stored: dict[str, Any] = field(default_factory=dict)
    logs: list[tuple[str, str]] = field(default_factory=list)

    def add_my_item(self, item: TradeItem) -> bool:
        if any(existing.assetid == item.assetid for existing in self.items_to_give):
            return False
        self.items_to_give.append(item)
        return True

    def add_their_item(self, item: TradeItem) -> bool:
        if any(existing.assetid == item.assetid for existing in self.items_to_receive):
            return False
        self.items_to_receive.append(item)
        return True

    def data(self, key: str, *value: Any) -> Any:
        if value:
            self.stored[key] = value[0]
            return None
        return self.stored.get(key)

    def set_message(self, message: str) -> None:
        self.message = message

    def summarize(self) -> str:
        return f"Asked: {len(self.items_to_give)} item(s)\nOffered: {len(self.items_to_receive)} item(s)"

    def log(self, level: str, message: str) -> None:
        self.logs.append((level, message))

    @property
    def given(self) -> list[str]:
        return [item.assetid for item in self.items_to_give]

    @property
    def received(self) -> list[str]:
        return [item.assetid for item in self.items_to_receive]


class FakeOfferFactory:
    def __init__(self):
        self.created: list[FakeOffer] = []

    def create_offer(self, partner: str) -> FakeOffer:
        offer = FakeOffer(partner=partner, id=None, is_our_offer=True)
        self.created.append(offer)
        return offer


class FakeSender:
    def __init__(self, error: TransportError | None = None):
        self.error = error
        self.sent: list[FakeOffer] = []

    async def send_offer(self, offer: FakeOffer) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(offer)


# =============================================================================
# PARTNER CHECKS
# =============================================================================


class FakeChecks:
    def __init__(
        self,
        escrow: bool = False,
        banned: bool = False,
        escrow_error: bool = False,
        ban_error: bool = False,
    ):
        self.escrow = escrow
        self.banned = banned
        self.escrow_error = escrow_error
        self.ban_error = ban_error
        self.calls: list[str] = []

    async def has_escrow(self, offer: FakeOffer) -> bool:
        self.calls.append("escrow")
        if self.escrow_error:
            raise PartnerCheckError("Failed to get user details")
        return self.escrow

    async def is_banned(self, partner: str) -> bool:
        self.calls.append("banned")
        if self.ban_error:
            raise PartnerCheckError("Failed to check bans")
        return self.banned
