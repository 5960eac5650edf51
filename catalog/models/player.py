"""Player ORM: persists game character records.

Invariants:
    - id is an autoincrement integer primary key assigned on insert
    - name/title columns are wider than the creation limits: updates skip length checks
    - race/profession store the enum value (upper-case name)
    - level/until_next_level are stored for filtering and sorting, but always
      written by the service from experience, never by clients
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class Player(Base):
    """Game character record."""
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    race: Mapped[str] = mapped_column(String(20), nullable=False)
    profession: Mapped[str] = mapped_column(String(20), nullable=False)
    birthday: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    banned: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    experience: Mapped[int] = mapped_column(Integer, nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    until_next_level: Mapped[int] = mapped_column(Integer, nullable=False)
