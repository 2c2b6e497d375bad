from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Tuple
from .ftypes import Maybe


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    category: str  # регистр не важен
    price: float

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"Product {self.id}: price must be non-negative")

    def with_price(self, price: float) -> "Product":
        """Новый Product с другой ценой (исходный не меняется)"""
        return replace(self, price=price)


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    tier: int  # 1..3


@dataclass(frozen=True)
class Order:
    id: int
    order_date: date
    customer: Customer
    products: Tuple[Product, ...] = ()
    status: str = "NEW"
    delivery_date: Optional[date] = None


@dataclass(frozen=True)
class PriceStatistics:
    """
    Сводка по ценам (аналог summary statistics).
    Для пустого набора: count=0, total=0.0, average/minimum/maximum = Maybe.nothing()
    """

    count: int
    total: float
    average: Maybe[float]
    minimum: Maybe[float]
    maximum: Maybe[float]
