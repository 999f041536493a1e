from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from pokemon_review.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .pokemon import PokemonCategory


class Category(Base):
    """
    SQLAlchemy model for a Category (e.g. "Fire", "Water").

    Name uniqueness is NOT a table constraint; the category handler performs a
    trimmed, case-insensitive check before creating a row.
    """
    __tablename__ = "categories"

    # Integer primary key assigned by the store
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    # --- Relationships ---

    # Association rows go away with the category
    pokemon_categories: Mapped[list["PokemonCategory"]] = relationship(
        "PokemonCategory",
        back_populates="category",
        cascade="all, delete-orphan",
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"
