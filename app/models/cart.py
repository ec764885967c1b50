from typing import Optional
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel

OPEN_CART_STATUS = "Processing"

class Cart(SQLModel, table=True):
    idCart: Optional[int] = Field(default=None, primary_key=True)

    # Owner
    idClient: int = Field(foreign_key="client.idClient", index=True)

    # Cart Details
    status: str = Field(default=OPEN_CART_STATUS, index=True)
    total: float = Field(default=0)

    # Timestamps
    creationDate: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class DetailCart(SQLModel, table=True):
    idDetailCart: Optional[int] = Field(default=None, primary_key=True)

    # References
    idCart: int = Field(foreign_key="cart.idCart", index=True)
    idProduct: int = Field(foreign_key="product.idProduct")

    # Line Details
    quantity: int = Field(default=1)
    unitPrice: float = Field(default=0)
    subtotal: float = Field(default=0)
