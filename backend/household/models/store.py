"""Store model - shops where pantry items are bought."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from household.models.base import BaseModel


class Store(BaseModel):
    __tablename__ = "stores"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    contact_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Store {self.name}>"
