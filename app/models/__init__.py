# Import all models to register them with SQLModel
from app.models.admin import Admin
from app.models.client import Client
from app.models.company import Company
from app.models.product import Product
from app.models.cart import Cart, DetailCart, OPEN_CART_STATUS
from app.models.entity import EntityDescriptor, ENTITIES

__all__ = [
    "Admin",
    "Client",
    "Company",
    "Product",
    "Cart",
    "DetailCart",
    "OPEN_CART_STATUS",
    "EntityDescriptor",
    "ENTITIES",
]
