"""SQL Player Repository: PlayerRepository over an SQLAlchemy AsyncSession.

Invariants:
    - Every save/delete commits immediately (atomic single-record writes)
    - Predicate criteria are translated into WHERE clauses; nothing is filtered in Python
    - Scans are ordered by the requested field, then by id
    - Birthdays read back from backends without tz support are treated as UTC

Design Decisions:
    - Contains uses LIKE with autoescape so '%' and '_' in the filter text match literally
    - Enum columns are compared against the enum value, matching what save() writes
"""

import logging
from enum import Enum

from sqlalchemy import ColumnElement, and_, delete, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import (
    PlayerId, PlayerOrder, PlayerRecord, Profession, Race, as_utc,
)
from catalog.core.player_filter import (
    Between, Contains, Criterion, Equals, PlayerPredicate,
)
from catalog.models.player import Player

logger = logging.getLogger(__name__)


def _column_value(value):
    return value.value if isinstance(value, Enum) else value


def criterion_clause(criterion: Criterion) -> ColumnElement[bool]:
    """SQL expression equivalent to criterion.matches()."""
    column = getattr(Player, criterion.field)
    if isinstance(criterion, Contains):
        return column.contains(criterion.text, autoescape=True)
    if isinstance(criterion, Equals):
        return column == _column_value(criterion.value)
    if isinstance(criterion, Between):
        if criterion.lower is None:
            return column <= criterion.upper
        if criterion.upper is None:
            return column >= criterion.lower
        return column.between(criterion.lower, criterion.upper)
    raise TypeError(f"Unsupported criterion: {criterion!r}")


def predicate_clause(predicate: PlayerPredicate) -> ColumnElement[bool]:
    """AND of every criterion; SQL TRUE for the empty predicate."""
    if predicate.is_unfiltered:
        return true()
    return and_(*(criterion_clause(c) for c in predicate.criteria))


def to_record(row: Player) -> PlayerRecord:
    return PlayerRecord(
        id=PlayerId(row.id),
        name=row.name,
        title=row.title,
        race=Race(row.race),
        profession=Profession(row.profession),
        birthday=as_utc(row.birthday),
        banned=row.banned,
        experience=row.experience,
        level=row.level,
        until_next_level=row.until_next_level,
    )


def _apply(record: PlayerRecord, row: Player) -> None:
    row.name = record.name
    row.title = record.title
    row.race = record.race.value
    row.profession = record.profession.value
    row.birthday = record.birthday
    row.banned = record.banned
    row.experience = record.experience
    row.level = record.level
    row.until_next_level = record.until_next_level


class SqlPlayerRepository:
    """PlayerRepository backed by the `players` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, player_id: PlayerId) -> PlayerRecord | None:
        row = await self.db.get(Player, player_id)
        return to_record(row) if row else None

    async def save(self, record: PlayerRecord) -> PlayerRecord:
        """Insert when record.id is None, overwrite otherwise."""
        row = None
        if record.id is not None:
            row = await self.db.get(Player, record.id)
        if row is None:
            row = Player()
            if record.id is not None:
                row.id = record.id
            self.db.add(row)
        _apply(record, row)
        await self.db.commit()
        await self.db.refresh(row)
        return to_record(row)

    async def delete_by_id(self, player_id: PlayerId) -> None:
        await self.db.execute(delete(Player).where(Player.id == player_id))
        await self.db.commit()

    async def scan(
        self,
        predicate: PlayerPredicate,
        order: PlayerOrder,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> list[PlayerRecord]:
        """Matching records sorted by order; one page when paging args are given."""
        sort_column = getattr(Player, order.field_name)
        query = (
            select(Player)
            .where(predicate_clause(predicate))
            .order_by(sort_column.asc(), Player.id.asc())
        )
        if page_number is not None and page_size is not None:
            query = query.limit(page_size).offset(page_number * page_size)

        result = await self.db.execute(query)
        return [to_record(row) for row in result.scalars().all()]
