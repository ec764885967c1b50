from datetime import datetime, timezone
from typing import Any, Dict

from app.core.errors import NotFoundError
from app.core.logging import get_logger
from app.db.gateway import Gateway
from app.models.cart import OPEN_CART_STATUS
from app.models.entity import CART, CLIENT, DETAIL_CART

logger = get_logger(__name__)


class CartService:
    """
    Add-to-cart workflow over the client's open ("Processing") cart.

    The owner lookup, open-cart check, cart creation and line-item insert all
    run in one transaction with the owning client row locked, so a client
    never ends up with two open carts or an empty cart left behind.
    """

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def add_product(
        self,
        client_id: int,
        product_id: int,
        quantity: int = 1,
        unit_price: float = 0,
    ) -> Dict[str, Any]:
        subtotal = quantity * unit_price

        with self.gateway.transaction() as conn:
            # Row lock on the owner serializes concurrent add-to-cart calls
            owner = self.gateway.fetch_by_id(CLIENT, client_id, conn=conn, for_update=True)
            if not owner:
                raise NotFoundError(CLIENT.name)
            client_id = owner[0][CLIENT.id_column]

            open_carts = self.gateway.fetch_all(
                CART.name,
                filters={"idClient": client_id, "status": OPEN_CART_STATUS},
                limit=1,
                conn=conn,
            )
            if open_carts:
                cart_id = open_carts[0][CART.id_column]
                logger.info(f"Client {client_id} already has open cart {cart_id}")
            else:
                cart_id = self.gateway.insert(
                    CART,
                    {
                        "idClient": client_id,
                        "status": OPEN_CART_STATUS,
                        "total": 0,
                        "creationDate": datetime.now(timezone.utc),
                    },
                    conn,
                )
                logger.info(f"Created cart {cart_id} for client {client_id}")

            item_id = self.gateway.insert(
                DETAIL_CART,
                {
                    "idCart": cart_id,
                    "idProduct": product_id,
                    "quantity": quantity,
                    "unitPrice": unit_price,
                    "subtotal": subtotal,
                },
                conn,
            )
            self.gateway.increment(CART, cart_id, "total", subtotal, conn)

            cart = self.gateway.fetch_by_id(CART, cart_id, conn=conn)[0]
            item = self.gateway.fetch_by_id(DETAIL_CART, item_id, conn=conn)[0]

        logger.info(f"Product {product_id} x{quantity} added to cart {cart_id}")
        return {"success": "product added to cart", "cart": cart, "item": item}
