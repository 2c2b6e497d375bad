import sys
import os
from datetime import date

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import pytest
from shop_core.domain import Customer, Order, Product
from shop_core.repos import InMemoryRepository
from shop_core.service import QueryService

SEED_PATH = os.path.join(os.path.dirname(__file__), "..", "data", "seed.json")


def make_service(products=(), orders=(), customers=()) -> QueryService:
    return QueryService(
        product_repo=InMemoryRepository(products),
        order_repo=InMemoryRepository(orders),
        customer_repo=InMemoryRepository(customers),
    )


@pytest.fixture
def seed_path():
    return SEED_PATH


@pytest.fixture
def customers():
    return (
        Customer(id=1, name="Ann", tier=1),
        Customer(id=2, name="Bob", tier=2),
        Customer(id=3, name="Kim", tier=2),
    )


@pytest.fixture
def products():
    return (
        Product(id=1, name="Cheap Book", category="Books", price=50.0),
        Product(id=2, name="Big Book", category="books", price=150.0),
        Product(id=3, name="Exact Book", category="BOOKS", price=100.0),
        Product(id=4, name="Stroller", category="Baby", price=300.0),
        Product(id=5, name="Robot", category="Toys", price=40.0),
        Product(id=6, name="Kite", category="toys", price=10.0),
        Product(id=7, name="Tea", category="Grocery", price=5.0),
    )


@pytest.fixture
def orders(customers, products):
    ann, bob, kim = customers
    p = {x.id: x for x in products}
    return (
        Order(id=10, order_date=date(2021, 1, 31), customer=bob, products=(p[4],)),
        Order(id=11, order_date=date(2021, 2, 1), customer=bob, products=(p[1], p[5])),
        Order(id=12, order_date=date(2021, 3, 15), customer=ann, products=(p[7], p[5])),
        Order(id=13, order_date=date(2021, 3, 15), customer=kim, products=(p[5], p[2])),
        Order(id=14, order_date=date(2021, 4, 1), customer=kim, products=(p[6],)),
        Order(id=15, order_date=date(2021, 4, 2), customer=bob, products=(p[3],)),
        Order(id=16, order_date=date(2021, 2, 28), customer=ann, products=()),
    )


@pytest.fixture
def service(products, orders, customers):
    return make_service(products, orders, customers)
