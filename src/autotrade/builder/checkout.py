"""CartCheckout — сборка оффера из корзины партнёра

Порядок:
1. Корзины нет → отказ
2. Сторона OUR перепроверяется по живому инвентарю бота (строки
   уменьшаются или удаляются)
3. Обе стороны пусты → корзина удаляется, возвращается только сообщение
   об изменениях
4. Сторона THEIR пуста → инвентарь партнёра не загружается
5. Иначе сторона THEIR перепроверяется по инвентарю партнёра
6. Оффер отправляется через OfferDispatcher; корзина удаляется только
   после успешной отправки (при отказе dispatch перепроверенная корзина
   остаётся у партнёра)

Вся работа с корзиной, включая отправку, выполняется под
partner_lock(partner).
"""

import logging
from typing import Mapping, Sequence

from autotrade.builder.common import (
    CONSTRUCTION_FAILED_MESSAGE,
    BuilderConfig,
    BuildResult,
    ConstructionError,
    allocate,
    attach_metadata,
    now_ms,
)
from autotrade.builder.dispatch import OfferDispatcher
from autotrade.cart.store import CartStore
from autotrade.cart.wording import join_words, pluralize
from autotrade.core.domain.cart import Cart, Side
from autotrade.core.domain.exchange import OfferMetadata
from autotrade.transport.errors import InventoryError
from autotrade.transport.protocols import InventoryProvider, OfferFactory, TradeOffer


logger = logging.getLogger(__name__)

NONE_AVAILABLE = {Side.OUR: "I don't have any", Side.THEIR: "You don't have any"}
SOME_AVAILABLE = {Side.OUR: "I only have", Side.THEIR: "You only have"}


def altered_message(cart: Cart, altered: Mapping[Side, Sequence[str]]) -> str:
    """
    Сводка изменений корзины: по сторонам (OUR, THEIR), внутри стороны
    сначала полностью недоступные, затем частично доступные предметы.

    Пример:
        I don't have any Keys or Team Captains
        You only have 2 Refined Metals and 1 Reclaimed Metal
    """
    lines = []
    for side in (Side.OUR, Side.THEIR):
        names = altered.get(side, ())
        none = [pluralize(name, 0) for name in names if cart.amount(name, side) == 0]
        some = [
            pluralize(name, cart.amount(name, side), True)
            for name in names
            if cart.amount(name, side) > 0
        ]
        if none:
            lines.append(f"{NONE_AVAILABLE[side]} {join_words(none, 'or')}")
        if some:
            lines.append(f"{SOME_AVAILABLE[side]} {join_words(some, 'and')}")
    return "\n".join(lines)


def _revalidate(cart: Cart, side: Side, available: Mapping[str, int]) -> list[str]:
    """Уменьшение строк до доступного количества; возвращает имена изменённых строк."""
    changed = []
    for name, line in list(cart.lines(side).items()):
        can_trade = available.get(line.sku, 0)
        if line.amount > can_trade:
            cart.remove(name, line.amount - max(can_trade, 0), side)
            changed.append(name)
    return changed


class CartCheckout:
    """Сборка и отправка оффера из корзины."""

    def __init__(
        self,
        store: CartStore,
        inventory: InventoryProvider,
        offers: OfferFactory,
        dispatcher: OfferDispatcher,
        config: BuilderConfig | None = None,
    ):
        self.store = store
        self.inventory = inventory
        self.offers = offers
        self.dispatcher = dispatcher
        self.config = config or BuilderConfig()

    async def checkout(self, partner: str) -> BuildResult:
        """
        Сборка оффера из корзины партнёра и его отправка.

        Args:
            partner: Идентификатор партнёра

        Returns:
            BuildResult с отправленным оффером или сообщением

        Raises:
            PartnerCheckError: Ошибка удалённой проверки партнёра (корзина сохраняется)
            TransportError: Ошибка отправки вне таблицы SEND_ERROR_RULES (корзина сохраняется)
        """
        async with self.store.partner_lock(partner):
            try:
                return await self._checkout(partner)
            except ConstructionError as e:
                logger.warning("Failed to check out cart for %s: %s", partner, e)
                return BuildResult(message=CONSTRUCTION_FAILED_MESSAGE)

    async def _checkout(self, partner: str) -> BuildResult:
        start = now_ms()
        cart = self.store.get(partner)

        if cart is None:
            return BuildResult(message="Failed to send offer, your cart is empty")

        altered: dict[Side, list[str]] = {Side.OUR: [], Side.THEIR: []}

        our_instances = {line.sku: list(self.inventory.find_by_sku(line.sku)) for line in cart.our.values()}
        altered[Side.OUR] = _revalidate(
            cart, Side.OUR, {sku: len(ids) for sku, ids in our_instances.items()}
        )

        if cart.is_empty():
            self.store.discard(partner)
            return BuildResult(message=altered_message(cart, altered))

        offer = self.offers.create_offer(partner)
        items: dict[str, dict[str, int]] = {Side.OUR.value: {}, Side.THEIR.value: {}}

        for line in cart.our.values():
            self._add_line(offer, True, our_instances[line.sku], line.sku, line.amount, items[Side.OUR.value])

        if cart.their:
            try:
                their_dict = await self.inventory.get_dictionary(partner, self.config.use_cache)
            except InventoryError as e:
                logger.warning("Failed to load inventory of %s: %s", partner, e)
                return BuildResult(message="Failed to load inventories, Steam might be down")

            altered[Side.THEIR] = _revalidate(
                cart, Side.THEIR, {sku: len(ids) for sku, ids in their_dict.items()}
            )
            for line in cart.their.values():
                instances = list(their_dict.get(line.sku, []))
                self._add_line(offer, False, instances, line.sku, line.amount, items[Side.THEIR.value])

        message = altered_message(cart, altered)

        if cart.is_empty():
            self.store.discard(partner)
            return BuildResult(message=message)

        metadata = OfferMetadata(
            partner=partner,
            items=items,
            diff=OfferMetadata.diff_from_items(items),
            handle_timestamp=start,
        )
        attach_metadata(offer, metadata)
        offer.set_message(self.config.offer_message)

        notices = (message or "Please wait while I process your offer...",)

        failure = await self.dispatcher.dispatch(offer)
        if failure is not None:
            return BuildResult(message=failure, notices=notices, metadata=metadata)

        self.store.discard(partner)
        return BuildResult(offer=offer, notices=notices, metadata=metadata)

    @staticmethod
    def _add_line(
        offer: TradeOffer,
        mine: bool,
        instances: Sequence[str],
        sku: str,
        amount: int,
        counts: dict[str, int],
    ) -> None:
        already = counts.get(sku, 0)
        added = allocate(offer, mine, instances[already:], amount)
        if added != amount:
            raise ConstructionError(f"allocated {added} of {amount} for {sku}")
        counts[sku] = already + amount
