from datetime import date
from typing import Dict, Iterable, List
from shop_core.domain import Order, Product, PriceStatistics
from shop_core.ftypes import Maybe
from shop_core.service import QueryService


# ============ Строки для таблиц ============


def format_price(price: float) -> str:
    return f"{price:.2f}"


def product_rows(products: Iterable[Product]) -> List[dict]:
    """Товары -> строки таблицы"""
    return [
        {
            "id": p.id,
            "name": p.name,
            "category": p.category,
            "price": format_price(p.price),
        }
        for p in products
    ]


def order_rows(orders: Iterable[Order]) -> List[dict]:
    """Заказы -> строки таблицы (товары через запятую)"""
    return [
        {
            "id": o.id,
            "order_date": o.order_date.isoformat(),
            "customer": o.customer.name,
            "tier": o.customer.tier,
            "status": o.status,
            "products": ", ".join(p.name for p in o.products),
        }
        for o in orders
    ]


def maybe_product_rows(maybe: Maybe[Product]) -> List[dict]:
    """Some(product) -> одна строка, Nothing -> пустая таблица"""
    return maybe.map(lambda p: product_rows((p,))).get_or_else([])


def statistics_row(stats: PriceStatistics) -> dict:
    """Сводка цен; для пустого набора вместо average/min/max пишем '-'"""

    def show(m: Maybe[float]) -> str:
        return m.map(format_price).get_or_else("-")

    return {
        "count": stats.count,
        "sum": format_price(stats.total),
        "average": show(stats.average),
        "min": show(stats.minimum),
        "max": show(stats.maximum),
    }


def mapping_rows(mapping: dict, key_name: str, value_name: str) -> List[dict]:
    """Словарь -> строки {key_name: ..., value_name: ...}"""
    return [{key_name: k, value_name: v} for k, v in mapping.items()]


# ============ Композитный отчёт ============


def average_row(service: QueryService, day: date = date(2021, 3, 15)) -> List[dict]:
    """Средний чек за день; Left (нет товаров) превращается в строку с ошибкой"""
    label = day.isoformat()
    return service.safe_average_order_value_on_date(day).fold(
        lambda error: [{"day": label, "error": error}],
        lambda value: [{"day": label, "average": format_price(value)}],
    )


def exercise_report(service: QueryService) -> Dict[str, List[dict]]:
    """
    Прогоняет все запросы сервиса с параметрами по умолчанию.
    Возвращает: {вопрос: строки таблицы}
    """
    return {
        "Books дороже 100": product_rows(service.products_by_category_above_price()),
        "Заказы с товарами Baby": order_rows(service.orders_containing_category()),
        "Toys со скидкой 10%": product_rows(service.discounted_by_category()),
        "Товары клиентов tier 2 (01.02.2021 - 01.04.2021)": product_rows(
            service.products_ordered_by_tier_in_range()
        ),
        "Самая дешёвая книга": maybe_product_rows(service.cheapest_in_category()),
        "3 последних заказа": order_rows(service.most_recent_orders()),
        "Товары заказов 15.03.2021": product_rows(service.orders_on_date_with_products()),
        "Выручка за февраль 2021": [
            {"total": format_price(service.total_revenue_in_month())}
        ],
        "Средний чек 15.03.2021": average_row(service),
        "Статистика цен Books": [statistics_row(service.category_price_statistics())],
        "Число товаров в заказе": mapping_rows(
            service.order_product_counts(), "order_id", "products"
        ),
        "Заказы по клиентам": [
            {"customer": c.name, "orders": ", ".join(str(o.id) for o in orders)}
            for c, orders in service.orders_grouped_by_customer().items()
        ],
        "Сумма по заказу": [
            {"order_id": o.id, "total": format_price(total)}
            for o, total in service.order_total_by_order().items()
        ],
        "Названия товаров по категориям": [
            {"category": category, "names": ", ".join(names)}
            for category, names in service.product_names_by_category().items()
        ],
        "Самый дорогой товар категории": [
            row
            for maybe in service.most_expensive_by_category().values()
            for row in maybe_product_rows(maybe)
        ],
    }
