from datetime import date
from typing import Callable, Hashable, Iterable, Iterator, TypeVar
from .domain import Order, Product

T = TypeVar("T")


## ленивый генератор: заказы, оформленные в указанный день
def iter_orders_on(orders: Iterable[Order], day: date) -> Iterator[Order]:
    for order in orders:
        if order.order_date == day:
            yield order


## заказы в диапазоне дат; start включительно, end включительно только при inclusive_end
def iter_orders_between(
    orders: Iterable[Order], start: date, end: date, inclusive_end: bool = True
) -> Iterator[Order]:
    for order in orders:
        if order.order_date < start:
            continue
        if order.order_date < end or (inclusive_end and order.order_date == end):
            yield order


## flatMap: все товары всех заказов подряд
def iter_products(orders: Iterable[Order]) -> Iterator[Product]:
    for order in orders:
        yield from order.products


## distinct по ключу, сохраняет первое вхождение и порядок
def iter_distinct(
    items: Iterable[T], key: Callable[[T], Hashable] = lambda x: x
) -> Iterator[T]:
    seen = set()
    for item in items:
        k = key(item)
        if k not in seen:
            seen.add(k)
            yield item
