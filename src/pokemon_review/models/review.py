from sqlalchemy import String, Text, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from pokemon_review.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .pokemon import Pokemon
    from .reviewer import Reviewer


class Review(Base):
    """
    SQLAlchemy model for a Review.

    Each review is written by one Reviewer about one Pokemon. Both foreign keys
    are NOT NULL, so a review whose reviewer or pokemon could not be resolved
    fails at flush time.
    """
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False
    )

    # Free-text body of the review
    text: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False
    )

    reviewer_id: Mapped[int] = mapped_column(
        ForeignKey("reviewers.id"),
        nullable=False,
        index=True
    )

    pokemon_id: Mapped[int] = mapped_column(
        ForeignKey("pokemon.id"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    # Many-to-One: the author of the review
    reviewer: Mapped["Reviewer"] = relationship(
        "Reviewer",
        back_populates="reviews"
    )

    # Many-to-One: the reviewed pokemon
    pokemon: Mapped["Pokemon"] = relationship(
        "Pokemon",
        back_populates="reviews"
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id!r}, title={self.title!r}, rating={self.rating!r})>"
