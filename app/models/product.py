from typing import Optional
from sqlmodel import Field, SQLModel

class Product(SQLModel, table=True):
    idProduct: Optional[int] = Field(default=None, primary_key=True)

    # Basic Info
    name: str = Field(index=True)
    description: Optional[str] = None

    # Image file name, served through /images/{name}
    image: Optional[str] = None

    # Pricing
    price: float = Field(default=0)

    # Seller
    idCompany: Optional[int] = Field(default=None, foreign_key="company.idCompany", index=True)
