import logging
from datetime import date
from typing import Callable, Dict, Optional, Tuple
from .compose import pipe, tap
from .domain import Customer, Order, Product, PriceStatistics
from .errors import EmptyAggregateError
from .ftypes import Either, Maybe
from .lazy import iter_distinct, iter_orders_between, iter_orders_on, iter_products
from .repos import CustomerRepository, InMemoryRepository, OrderRepository, ProductRepository
from .transforms import (
    by_category,
    by_customer_tier,
    by_price_above,
    cheapest,
    discounted,
    group_by,
    group_by_category,
    has_product_in,
    load_seed,
    most_expensive,
    price_statistics,
    prices,
    total_price,
)

logger = logging.getLogger(__name__)

OrderSink = Callable[[Order], None]


def log_order(order: Order) -> None:
    """Sink по умолчанию: пишет заказ в лог"""
    logger.info("matched order: %r", order)


def _distinct_products(products) -> Tuple[Product, ...]:
    return tuple(iter_distinct(products, key=lambda p: p.id))


class QueryService:
    """
    Фасад запросов над снимками репозиториев.
    Каждый метод: find_all() -> конвейер (filter/map/flatMap) -> результат.
    Состояния между вызовами нет.
    """

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        customer_repo: Optional[CustomerRepository] = None,
    ):
        self.product_repo = product_repo
        self.order_repo = order_repo
        self.customer_repo = customer_repo if customer_repo is not None else InMemoryRepository()

    # ============ Фильтры и преобразования ============

    def products_by_category_above_price(
        self, category: str = "Books", min_price: float = 100
    ) -> Tuple[Product, ...]:
        """Товары категории дороже min_price"""
        matches_category = by_category(category)
        is_expensive = by_price_above(min_price)
        return tuple(
            filter(lambda p: matches_category(p) and is_expensive(p), self.product_repo.find_all())
        )

    def orders_containing_category(self, category: str = "Baby") -> Tuple[Order, ...]:
        """Заказы, где есть хотя бы один товар категории"""
        return tuple(filter(has_product_in(category), self.order_repo.find_all()))

    def discounted_by_category(
        self, category: str = "Toys", factor: float = 0.9
    ) -> Tuple[Product, ...]:
        """Товары категории с применённой скидкой (новые экземпляры)"""
        return tuple(
            map(discounted(factor), filter(by_category(category), self.product_repo.find_all()))
        )

    def products_ordered_by_tier_in_range(
        self,
        tier: int = 2,
        start: date = date(2021, 2, 1),
        end: date = date(2021, 4, 1),
    ) -> Tuple[Product, ...]:
        """Товары из заказов покупателей уровня tier за [start, end], без повторов"""
        pipeline = pipe(
            lambda orders: filter(by_customer_tier(tier), orders),
            lambda orders: iter_orders_between(orders, start, end, inclusive_end=True),
            iter_products,
            _distinct_products,
        )
        return pipeline(self.order_repo.find_all())

    def cheapest_in_category(self, category: str = "Books") -> Maybe[Product]:
        return cheapest(filter(by_category(category), self.product_repo.find_all()))

    def most_recent_orders(self, limit: int = 3) -> Tuple[Order, ...]:
        """Последние limit заказов (сортировка стабильная)"""
        ranked = sorted(self.order_repo.find_all(), key=lambda o: o.order_date, reverse=True)
        return tuple(ranked[:limit])

    def orders_on_date_with_products(
        self, day: date = date(2021, 3, 15), sink: Optional[OrderSink] = None
    ) -> Tuple[Product, ...]:
        """
        Товары заказов за день, без повторов.
        Каждый найденный заказ передаётся в sink (по умолчанию в лог) до возврата результата.
        """
        pipeline = pipe(
            lambda orders: iter_orders_on(orders, day),
            tap(sink or log_order),
            iter_products,
            _distinct_products,
        )
        return pipeline(self.order_repo.find_all())

    # ============ Агрегаты ============

    def total_revenue_in_month(
        self, start: date = date(2021, 2, 1), end: date = date(2021, 3, 1)
    ) -> float:
        """Сумма цен товаров в заказах за [start, end)"""
        orders = iter_orders_between(self.order_repo.find_all(), start, end, inclusive_end=False)
        return total_price(iter_products(orders))

    def average_order_value_on_date(self, day: date = date(2021, 3, 15)) -> float:
        """
        Средняя цена товара в заказах за день.
        Если товаров нет, бросает EmptyAggregateError.
        """
        values = prices(iter_products(iter_orders_on(self.order_repo.find_all(), day)))
        if not values:
            raise EmptyAggregateError(f"No ordered products on {day.isoformat()}")
        return sum(values) / len(values)

    def safe_average_order_value_on_date(
        self, day: date = date(2021, 3, 15)
    ) -> Either[str, float]:
        """То же, что average_order_value_on_date, но ошибка возвращается как Left"""
        try:
            return Either.right(self.average_order_value_on_date(day))
        except EmptyAggregateError as exc:
            return Either.left(str(exc))

    def category_price_statistics(self, category: str = "Books") -> PriceStatistics:
        return price_statistics(
            prices(filter(by_category(category), self.product_repo.find_all()))
        )

    # ============ Группировки ============

    def order_product_counts(self) -> Dict[int, int]:
        """id заказа -> число товаров (включая пустые заказы)"""
        return {o.id: len(o.products) for o in self.order_repo.find_all()}

    def orders_grouped_by_customer(self) -> Dict[Customer, Tuple[Order, ...]]:
        return group_by(self.order_repo.find_all(), lambda o: o.customer)

    def order_total_by_order(self) -> Dict[Order, float]:
        return {o: total_price(o.products) for o in self.order_repo.find_all()}

    def product_names_by_category(self) -> Dict[str, Tuple[str, ...]]:
        """Категория -> имена товаров в порядке появления (повторы сохраняются)"""
        return {
            category: tuple(p.name for p in group)
            for category, group in group_by_category(self.product_repo.find_all()).items()
        }

    def most_expensive_by_category(self) -> Dict[str, Maybe[Product]]:
        return {
            category: most_expensive(group)
            for category, group in group_by_category(self.product_repo.find_all()).items()
        }


def build_service(seed_path: str) -> QueryService:
    """Собирает QueryService поверх in-memory репозиториев из seed.json"""
    products, customers, orders = load_seed(seed_path)
    logger.debug(
        "loaded seed %s: %d products, %d customers, %d orders",
        seed_path,
        len(products),
        len(customers),
        len(orders),
    )
    return QueryService(
        product_repo=InMemoryRepository(products),
        order_repo=InMemoryRepository(orders),
        customer_repo=InMemoryRepository(customers),
    )
