import json
from datetime import date
from functools import reduce
from typing import Callable, Dict, Iterable, Tuple, TypeVar
from .domain import Customer, Order, Product, PriceStatistics
from .errors import SeedDataError
from .ftypes import Maybe

T = TypeVar("T")
K = TypeVar("K")


def load_seed(
    path: str,
) -> Tuple[Tuple[Product, ...], Tuple[Customer, ...], Tuple[Order, ...]]:
    """
    Загружает seed.json и возвращает кортежи иммутабельных записей.
    Заказы ссылаются на покупателя (customer_id) и товары (product_ids).
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as exc:
            raise SeedDataError(f"{path}: invalid JSON: {exc}") from exc

    def _build(factory, record: dict, what: str):
        # лишние/отсутствующие поля, отрицательная цена, кривая дата
        try:
            return factory(record)
        except (TypeError, KeyError, ValueError) as exc:
            raise SeedDataError(f"Malformed {what} {record!r}: {exc}") from exc

    products = tuple(_build(lambda p: Product(**p), p, "product") for p in data.get("products", []))
    customers = tuple(_build(lambda c: Customer(**c), c, "customer") for c in data.get("customers", []))

    products_by_id = {p.id: p for p in products}
    customers_by_id = {c.id: c for c in customers}

    def _resolve(index: dict, key, what: str, order_id):
        if key not in index:
            raise SeedDataError(f"Order {order_id}: unknown {what} id {key!r}")
        return index[key]

    def _to_order(o):
        order_id = o["id"]
        delivery = o.get("delivery_date")
        return Order(
            id=order_id,
            order_date=date.fromisoformat(o["order_date"]),
            customer=_resolve(customers_by_id, o["customer_id"], "customer", order_id),
            products=tuple(
                _resolve(products_by_id, pid, "product", order_id)
                for pid in o.get("product_ids", [])
            ),
            status=str(o.get("status", "NEW")),
            delivery_date=date.fromisoformat(delivery) if delivery else None,
        )

    orders = tuple(_build(_to_order, o, "order") for o in data.get("orders", []))
    return products, customers, orders


# ============ Замыкания-фильтры (HOF) ============


def same_category(a: str, b: str) -> bool:
    """Сравнение категорий без учёта регистра"""
    return a.casefold() == b.casefold()


def by_category(category: str) -> Callable[[Product], bool]:
    """Фильтр по категории (регистр не важен)"""
    return lambda p: same_category(p.category, category)


def by_price_above(min_price: float) -> Callable[[Product], bool]:
    """Строго дороже min_price"""
    return lambda p: p.price > min_price


def by_customer_tier(tier: int) -> Callable[[Order], bool]:
    """Заказы покупателей указанного уровня"""
    return lambda o: o.customer.tier == tier


def has_product_in(category: str) -> Callable[[Order], bool]:
    """Заказ содержит хотя бы один товар категории"""
    matches = by_category(category)
    return lambda o: any(map(matches, o.products))


def discounted(factor: float) -> Callable[[Product], Product]:
    """Новая цена = price * factor"""
    return lambda p: p.with_price(p.price * factor)


# ============ Агрегация ============


def prices(products: Iterable[Product]) -> Tuple[float, ...]:
    return tuple(map(lambda p: p.price, products))


def total_price(products: Iterable[Product]) -> float:
    """Сумма цен через reduce"""
    return reduce(lambda acc, p: acc + p.price, products, 0.0)


def price_statistics(values: Iterable[float]) -> PriceStatistics:
    """
    count/sum/min/max за один проход reduce.
    Пустой вход даёт count=0, total=0.0 и Nothing для average/minimum/maximum.
    """

    def accumulate(acc: tuple, price: float) -> tuple:
        count, total, low, high = acc
        return (
            count + 1,
            total + price,
            price if low is None else min(low, price),
            price if high is None else max(high, price),
        )

    count, total, low, high = reduce(accumulate, values, (0, 0.0, None, None))
    return PriceStatistics(
        count=count,
        total=total,
        average=Maybe.some(total / count) if count else Maybe.nothing(),
        minimum=Maybe.of(low),
        maximum=Maybe.of(high),
    )


# ============ Группировки ============


def group_by(
    items: Iterable[T], key: Callable[[T], K]
) -> Dict[K, Tuple[T, ...]]:
    """
    Группирует элементы по ключу, сохраняя порядок появления
    (и ключей, и элементов внутри группы)
    """

    def accumulate(acc: dict, item: T) -> dict:
        k = key(item)
        acc[k] = acc.get(k, ()) + (item,)
        return acc

    return reduce(accumulate, items, {})


def group_by_category(products: Iterable[Product]) -> Dict[str, Tuple[Product, ...]]:
    """
    Группы по категории без учёта регистра.
    Название группы берётся из первого встреченного написания.
    """
    grouped = group_by(products, lambda p: p.category.casefold())
    return {group[0].category: group for group in grouped.values()}


def most_expensive(products: Iterable[Product]) -> Maybe[Product]:
    """Самый дорогой товар; при равных ценах первый встреченный"""
    return reduce(
        lambda acc, p: Maybe.some(p) if acc.is_none() or p.price > acc.value.price else acc,
        products,
        Maybe.nothing(),
    )


def cheapest(products: Iterable[Product]) -> Maybe[Product]:
    """Самый дешёвый товар; при равных ценах первый встреченный"""
    return reduce(
        lambda acc, p: Maybe.some(p) if acc.is_none() or p.price < acc.value.price else acc,
        products,
        Maybe.nothing(),
    )
