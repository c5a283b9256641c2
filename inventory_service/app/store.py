from typing import Any, Dict

from common.models import Product
from common.repository import InMemoryRepository
from inventory_service.app.validation import validate_price, validate_stock

# Initial seed data for the in-memory repository
INITIAL_PRODUCTS = [
    Product(id="p1", name="Coffee Machine", stock=3, price=100),
    Product(id="p2", name="Electric Kettle", stock=0, price=40),
    Product(id="p3", name="Toaster", stock=10, price=35),
    Product(id="p4", name="Espresso Grinder", stock=5, price=120),
    Product(id="p5", name="Milk Frother", stock=8, price=25),
]


class ProductStore(InMemoryRepository[Product]):
    model = Product
    entity = "PRODUCT"
    label = "Product"
    logger_name = "inventory_store"

    def check_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        checked = dict(fields)
        if "stock" in checked:
            checked["stock"] = validate_stock(checked["stock"])
        if "price" in checked:
            checked["price"] = validate_price(checked["price"])
        return checked


store = ProductStore(INITIAL_PRODUCTS)


def get_store() -> ProductStore:
    return store
