from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class EntityDescriptor:
    """Static description of a table exposed over HTTP.

    ``name`` is the table name, ``id_column`` the column matched by
    ``/{route}/{id}`` and ``route`` the plural path segment.
    """
    name: str
    id_column: str
    route: str


ADMIN = EntityDescriptor("admin", "idAdmin", "admins")
CLIENT = EntityDescriptor("client", "idClient", "clients")
PRODUCT = EntityDescriptor("product", "idProduct", "products")
COMPANY = EntityDescriptor("company", "idCompany", "companies")
CART = EntityDescriptor("cart", "idCart", "carts")
DETAIL_CART = EntityDescriptor("detailcart", "idDetailCart", "detailcarts")

ENTITIES: Dict[str, EntityDescriptor] = {
    entity.route: entity
    for entity in (ADMIN, CLIENT, PRODUCT, COMPANY, CART, DETAIL_CART)
}
