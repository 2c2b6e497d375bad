from typing import Generic, Iterable, Protocol, Tuple, TypeVar
from .domain import Customer, Order, Product

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Repository(Protocol[T_co]):
    """Контракт источника данных: только полная выборка, без фильтров"""

    def find_all(self) -> Tuple[T_co, ...]: ...


class InMemoryRepository(Generic[T]):
    """Репозиторий поверх иммутабельного снимка (кортежа)"""

    def __init__(self, items: Iterable[T] = ()):
        self._items: Tuple[T, ...] = tuple(items)

    def find_all(self) -> Tuple[T, ...]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)


ProductRepository = Repository[Product]
OrderRepository = Repository[Order]
CustomerRepository = Repository[Customer]
