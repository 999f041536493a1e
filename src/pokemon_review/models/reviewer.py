from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from pokemon_review.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .review import Review


class Reviewer(Base):
    """
    SQLAlchemy model for a Reviewer.

    `reviews` is a navigation collection only: deleting a reviewer's reviews is
    an explicit batch operation, not a cascade.
    """
    __tablename__ = "reviewers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    # --- Relationships ---

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="reviewer",
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Reviewer(id={self.id!r}, name={self.name!r})>"
