from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core.errors import DatabaseError, NotFoundError
from app.db.gateway import Gateway
from app.db.session import get_gateway
from app.models.entity import CART
from app.routers.factory import make_list_filtered_handler
from app.services.cart import CartService
from app.services.translator import translate_error

router = APIRouter()

class CartItemCreate(BaseModel):
    idClient: int
    idProduct: int
    quantity: int = 1
    unitPrice: float = 0

def get_cart_service(gateway: Gateway = Depends(get_gateway)) -> CartService:
    return CartService(gateway)

@router.post("/add")
def add_to_cart(cart_item: CartItemCreate, service: CartService = Depends(get_cart_service)):
    """Add a product to the client's open cart, opening one if needed"""
    try:
        return service.add_product(
            cart_item.idClient,
            cart_item.idProduct,
            quantity=cart_item.quantity,
            unit_price=cart_item.unitPrice,
        )
    except (DatabaseError, NotFoundError) as e:
        return translate_error(e, CART.name, "add_to_cart")

router.add_api_route(
    "/status/{value}",
    make_list_filtered_handler(CART, "status"),
    methods=["GET"],
    name="list_carts_by_status",
)
