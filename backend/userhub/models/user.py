"""User ORM — the single persisted entity.

Invariants:
    - id is an auto-incrementing integer primary key (never reused on SQLite)
    - name and email are non-nullable text
    - email uniqueness is enforced by the UNIQUE constraint, not by app code
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from userhub.db.base import Base


class User(Base):
    """Registered user."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
