"""CartStore — хранилище корзин партнёров.

Жизненный цикл корзины:
- создаётся при первом add для партнёра
- удаляется, когда обе стороны пусты, и после отправки оффера из checkout

Корзины разных партнёров независимы. Все сценарии, меняющие корзину
партнёра (CartService, CartCheckout), удерживают partner_lock(partner)
на всё время работы с ней, поэтому не перемежаются.
"""

import asyncio
import logging
from weakref import WeakValueDictionary

from autotrade.core.domain.cart import Cart, Side


logger = logging.getLogger(__name__)


class CartStore:
    """Реестр корзин, ключ — идентификатор партнёра."""

    def __init__(self):
        self._carts: dict[str, Cart] = {}
        self._locks: "WeakValueDictionary[str, asyncio.Lock]" = WeakValueDictionary()

    def partner_lock(self, partner: str) -> asyncio.Lock:
        """Lock корзины партнёра (существует, пока кто-то его удерживает)."""
        lock = self._locks.get(partner)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[partner] = lock
        return lock

    def add(self, partner: str, sku: str, name: str, qty: int, side: Side) -> Cart:
        """
        Добавление qty единиц в строку name на стороне side.

        Raises:
            ValueError: Если qty <= 0
        """
        if qty <= 0:
            raise ValueError(f"Quantity must be positive: {qty}")

        cart = self._carts.get(partner)
        if cart is None:
            cart = Cart()
            self._carts[partner] = cart
            logger.debug("Created cart for %s", partner)

        cart.add(sku, name, qty, side)
        return cart

    def remove(
        self,
        partner: str,
        name: str | None = None,
        qty: int = 0,
        side: Side = Side.OUR,
        all_items: bool = False,
    ) -> Cart | None:
        """
        Уменьшение строки на qty (строка удаляется при достижении нуля)
        или очистка всей корзины при all_items=True.

        Returns:
            Корзина или None, если она удалена (обе стороны пусты)
        """
        cart = self._carts.get(partner)
        if cart is None:
            return None

        if all_items:
            cart.clear()
        elif name is not None:
            if qty < 0:
                raise ValueError(f"Quantity cannot be negative: {qty}")
            cart.remove(name, qty, side)

        if cart.is_empty():
            self.discard(partner)
            return None
        return cart

    def get(self, partner: str) -> Cart | None:
        return self._carts.get(partner)

    def exists(self, partner: str) -> bool:
        return partner in self._carts

    def is_empty(self, partner: str) -> bool:
        cart = self._carts.get(partner)
        return cart is None or cart.is_empty()

    def amount(self, partner: str, name: str, side: Side) -> int:
        cart = self._carts.get(partner)
        return cart.amount(name, side) if cart else 0

    def discard(self, partner: str) -> None:
        if self._carts.pop(partner, None) is not None:
            logger.debug("Discarded cart for %s", partner)
