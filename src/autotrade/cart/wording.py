"""Формулировки для сообщений партнёру: множественное число и перечисления."""

from typing import Sequence

import inflect


_inflect = inflect.engine()


def _plural_word(word: str) -> str:
    # "#86", "(Strange)": не слово, оставляем как есть
    if not word or not word[-1].isalpha():
        return word
    return _inflect.plural_noun(word)


def pluralize(name: str, count: int = 2, inclusive: bool = False) -> str:
    """
    Имя предмета в форме для количества count.

    Во множественное число ставится последнее слово имени
    ("Mann Co. Supply Crate Key" → "Mann Co. Supply Crate Keys").

    Args:
        name: Отображаемое имя
        count: Количество (1: единственное число)
        inclusive: Добавить количество перед именем

    Returns:
        "Key", "Keys" или "3 Keys"
    """
    if count == 1:
        text = name
    else:
        head, _, last = name.rpartition(" ")
        text = f"{head} {_plural_word(last)}" if head else _plural_word(last)
    return f"{count} {text}" if inclusive else text


def join_words(words: Sequence[str], conjunction: str) -> str:
    """
    Перечисление с союзом перед последним элементом.

    >>> join_words(["a", "b", "c"], "or")
    'a, b or c'
    """
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return f"{', '.join(words[:-1])} {conjunction} {words[-1]}"


def have_has(count: int) -> str:
    return "have" if count > 1 else "has"


def they_it(count: int) -> str:
    return "They have" if count > 1 else "It has"
