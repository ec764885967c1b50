from typing import Optional
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel

class Client(SQLModel, table=True):
    idClient: Optional[int] = Field(default=None, primary_key=True)

    # Basic Info
    name: str
    email: str = Field(unique=True, index=True)
    phone: Optional[str] = Field(default=None, index=True)

    # Address
    address: Optional[str] = None
    city: Optional[str] = None

    # Timestamps
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
