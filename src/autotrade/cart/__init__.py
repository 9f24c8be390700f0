"""Cart — корзины партнёров для подготовки исходящих офферов."""

from .service import CartService, CartUpdate
from .store import CartStore
from .wording import join_words, pluralize

__all__ = [
    "CartStore",
    "CartService",
    "CartUpdate",
    "pluralize",
    "join_words",
]
