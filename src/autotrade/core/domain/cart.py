"""
Cart — Модель корзины партнёра

Две стороны корзины:
- OUR: предметы бота, которые партнёр хочет забрать
- THEIR: предметы партнёра, которые он хочет отдать

ИНВАРИАНТ: amount > 0 у каждой строки; строка удаляется в момент,
когда количество достигает нуля.
"""

from dataclasses import dataclass, field
from enum import Enum


class Side(str, Enum):
    """Сторона сделки"""

    OUR = "our"
    THEIR = "their"

    @property
    def other(self) -> "Side":
        return Side.THEIR if self is Side.OUR else Side.OUR


@dataclass
class CartLine:
    """Строка корзины."""

    sku: str
    amount: int


@dataclass
class Cart:
    """Корзина одного партнёра (ключ строк — отображаемое имя предмета)."""

    our: dict[str, CartLine] = field(default_factory=dict)
    their: dict[str, CartLine] = field(default_factory=dict)

    def lines(self, side: Side) -> dict[str, CartLine]:
        return self.our if side is Side.OUR else self.their

    def sku(self, name: str, side: Side) -> str | None:
        line = self.lines(side).get(name)
        return line.sku if line else None

    def amount(self, name: str, side: Side) -> int:
        line = self.lines(side).get(name)
        return line.amount if line else 0

    def add(self, sku: str, name: str, amount: int, side: Side) -> None:
        if amount <= 0:
            raise ValueError(f"Cart amount must be positive: {amount}")
        lines = self.lines(side)
        if name in lines:
            lines[name].amount += amount
        else:
            lines[name] = CartLine(sku=sku, amount=amount)

    def remove(self, name: str, amount: int, side: Side) -> None:
        lines = self.lines(side)
        line = lines.get(name)
        if line is None:
            return
        line.amount -= amount
        if line.amount <= 0:
            del lines[name]

    def clear(self) -> None:
        self.our.clear()
        self.their.clear()

    def is_empty(self) -> bool:
        return not self.our and not self.their

    def snapshot(self) -> dict[str, dict[str, dict]]:
        """Копия содержимого в виде dict (для сообщений и логов)."""
        return {
            side.value: {
                name: {"sku": line.sku, "amount": line.amount}
                for name, line in self.lines(side).items()
            }
            for side in Side
        }
