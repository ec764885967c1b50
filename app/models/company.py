from typing import Optional
from sqlmodel import Field, SQLModel

class Company(SQLModel, table=True):
    idCompany: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    email: Optional[str] = None
    phone: Optional[str] = None
    logo: Optional[str] = None
