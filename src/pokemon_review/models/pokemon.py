from sqlalchemy import String, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import date
from pokemon_review.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .category import Category
    from .review import Review


class Pokemon(Base):
    """
    SQLAlchemy model for a Pokemon record.

    Pokemon are referenced by reviews (one-to-many) and grouped into
    categories through the `PokemonCategory` association.
    """
    __tablename__ = "pokemon"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    birth_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True
    )

    # --- Relationships ---

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="pokemon",
        lazy="select"
    )

    pokemon_categories: Mapped[list["PokemonCategory"]] = relationship(
        "PokemonCategory",
        back_populates="pokemon",
        cascade="all, delete-orphan",
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Pokemon(id={self.id!r}, name={self.name!r})>"


class PokemonCategory(Base):
    """
    Many-to-many association between Pokemon and Category.

    Modelled as its own class (composite primary key) so category deletion can
    cascade to the association rows through the ORM.
    """
    __tablename__ = "pokemon_categories"

    pokemon_id: Mapped[int] = mapped_column(
        ForeignKey("pokemon.id", ondelete="CASCADE"),
        primary_key=True
    )

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
        index=True
    )

    # --- Relationships ---

    pokemon: Mapped["Pokemon"] = relationship(
        "Pokemon",
        back_populates="pokemon_categories"
    )

    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="pokemon_categories"
    )

    def __repr__(self) -> str:
        return f"<PokemonCategory(pokemon_id={self.pokemon_id!r}, category_id={self.category_id!r})>"
