"""Binding - пара get/set, привязанная к id рутины."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Binding(Generic[T]):
    """
    Аксессор для UI-полей (чекбокс выполнения, поле названия).

    Держит ссылку на store через замыкания; живет столько же, сколько store.
    """

    get: Callable[[], T]
    set: Callable[[T], None]

    @property
    def value(self) -> T:
        return self.get()
