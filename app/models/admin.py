from typing import Optional
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel

class Admin(SQLModel, table=True):
    idAdmin: Optional[int] = Field(default=None, primary_key=True)

    # Basic Info
    name: str
    email: str = Field(unique=True, index=True)
    phone: Optional[str] = None

    # Timestamps
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
