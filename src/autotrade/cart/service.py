"""Cart service — изменение корзины с сообщениями для партнёра.

add_to_cart:
- deposit (сторона THEIR) добавляется как есть
- withdrawal (сторона OUR) ограничивается инвентарём бота за вычетом
  уже лежащего в корзине количества (лимиты стока здесь не проверяются)

remove_from_cart:
- уменьшает строку не больше, чем есть в корзине, либо очищает корзину

Обе операции выполняются под partner_lock(partner): изменение не может
вклиниться в checkout той же корзины, пока тот ждёт инвентарь или отправку.
"""

from dataclasses import dataclass

from autotrade.cart.store import CartStore
from autotrade.cart.wording import have_has, pluralize, they_it
from autotrade.core.domain.cart import Side
from autotrade.transport.protocols import InventoryProvider, SchemaProvider


@dataclass(frozen=True)
class CartUpdate:
    """Результат изменения корзины."""

    cart: dict | None  # снапшот корзины или None, если корзины нет
    message: str


class CartService:
    """Операции над корзиной с формированием ответов партнёру."""

    def __init__(self, store: CartStore, inventory: InventoryProvider, schema: SchemaProvider):
        self.store = store
        self.inventory = inventory
        self.schema = schema

    async def add_to_cart(self, partner: str, sku: str, amount: int, deposit: bool) -> CartUpdate:
        """
        Добавление предмета в корзину.

        Args:
            partner: Идентификатор партнёра
            sku: SKU предмета
            amount: Запрошенное количество
            deposit: True: предмет партнёра (THEIR), False: предмет бота (OUR)
        """
        async with self.store.partner_lock(partner):
            return self._add(partner, sku, amount, deposit)

    async def remove_from_cart(
        self,
        partner: str,
        name: str | None,
        amount: int,
        our: bool,
        all_items: bool = False,
    ) -> CartUpdate:
        """
        Удаление предмета из корзины или очистка корзины.

        Args:
            partner: Идентификатор партнёра
            name: Отображаемое имя строки
            amount: Количество к удалению
            our: True: сторона бота, False: сторона партнёра
            all_items: Очистить корзину целиком
        """
        async with self.store.partner_lock(partner):
            return self._remove(partner, name, amount, our, all_items)

    def _snapshot(self, partner: str) -> dict | None:
        cart = self.store.get(partner)
        return cart.snapshot() if cart else None

    def _add(self, partner: str, sku: str, amount: int, deposit: bool) -> CartUpdate:
        side = Side.THEIR if deposit else Side.OUR
        name = self.schema.get_name(sku)

        if deposit:
            message = f"{pluralize(name, amount, True)} {have_has(amount)} been added to your cart"
        else:
            can_trade = self.inventory.get_amount(sku) - self.store.amount(partner, name, side)

            if can_trade <= 0:
                message = f"I don't have any {pluralize(name, 0)}"
                amount = 0
            elif can_trade < amount:
                amount = can_trade
                message = (
                    f"I only have {pluralize(name, amount, True)}. "
                    f"{they_it(amount)} been added to your cart"
                )
            else:
                message = f"{pluralize(name, amount, True)} {have_has(amount)} been added to your cart"

        if amount > 0:
            self.store.add(partner, sku, name, amount, side)

        return CartUpdate(cart=self._snapshot(partner), message=message)

    def _remove(
        self,
        partner: str,
        name: str | None,
        amount: int,
        our: bool,
        all_items: bool = False,
    ) -> CartUpdate:
        if not self.store.exists(partner):
            return CartUpdate(cart=None, message="Your cart is empty")

        side = Side.OUR if our else Side.THEIR

        if all_items:
            message = "Your cart has been emptied"
            self.store.remove(partner, all_items=True)
            return CartUpdate(cart=self._snapshot(partner), message=message)

        whose = "my" if our else "your"
        in_cart = self.store.amount(partner, name, side)

        if in_cart == 0:
            amount = 0
            message = f"There are no {pluralize(name, 0)} on {whose} side of the cart"
        elif amount > in_cart:
            amount = in_cart
            message = (
                f"There were only {pluralize(name, amount, True)} on {whose} side of the cart. "
                f"{they_it(amount)} been removed"
            )
        else:
            message = f"{pluralize(name, amount, True)} {have_has(amount)} been removed from {whose} side of the cart"

        self.store.remove(partner, name, amount, side)
        return CartUpdate(cart=self._snapshot(partner), message=message)
