"""Player Service: create, fetch, merge-update, delete, list and count players.

Invariants:
    - Ids <= 0 or wider than BIGINT raise InvalidInputError before any repository call
    - level/until_next_level are recomputed from experience on every write;
      client values for them never reach the repository
    - update validates the patch BEFORE looking the record up (400 wins over 404)
    - Repository failures propagate unchanged (no retry, no compensation)
    - Concurrent updates to one id are last-write-wins

Design Decisions:
    - Impureim sandwich: pure core (validation, progression, predicate) wrapped
      by async repository calls
    - Repository injected through the constructor (PlayerRepository protocol)
"""

import logging
from dataclasses import replace

from catalog.core.domain_types import (
    DEFAULT_PAGE_SIZE, MAX_COLUMN_INT, MAX_PLAYER_ID, MIN_COLUMN_INT,
    PlayerDraft, PlayerId, PlayerOrder, PlayerPatch, PlayerRecord,
)
from catalog.core.errors import InvalidInputError, PlayerNotFoundError
from catalog.core.player_filter import PlayerCriteria, PlayerPredicate, build_predicate
from catalog.core.progression import derive_progression
from catalog.core.repository_protocols import PlayerRepository
from catalog.core.validation import validate_draft, validate_patch

logger = logging.getLogger(__name__)


def _check_id(player_id: int) -> PlayerId:
    if not 0 < player_id <= MAX_PLAYER_ID:
        raise InvalidInputError(f"Invalid player id: {player_id}", ["id"])
    return PlayerId(player_id)


_INTEGER_BOUNDS = ("min_experience", "max_experience", "min_level", "max_level")


def _predicate(criteria: PlayerCriteria) -> PlayerPredicate:
    out_of_range = [
        name for name in _INTEGER_BOUNDS
        if getattr(criteria, name) is not None
        and not MIN_COLUMN_INT <= getattr(criteria, name) <= MAX_COLUMN_INT
    ]
    if out_of_range:
        raise InvalidInputError("Filter bounds out of range", out_of_range)
    try:
        return build_predicate(criteria)
    except OverflowError:
        raise InvalidInputError(
            "Birthday bounds out of range", ["after", "before"],
        )


class PlayerService:
    """Player use cases over a PlayerRepository."""

    def __init__(self, repository: PlayerRepository):
        self.repository = repository

    async def create(self, draft: PlayerDraft) -> PlayerRecord:
        """Validate fully, default banned, derive progression, persist."""
        failures = validate_draft(draft)
        if failures:
            logger.info(f"Rejected player draft: invalid {', '.join(failures)}")
            raise InvalidInputError("Invalid player", failures)

        level, until_next_level = derive_progression(draft.experience)
        record = PlayerRecord(
            name=draft.name,
            title=draft.title,
            race=draft.race,
            profession=draft.profession,
            birthday=draft.birthday,
            banned=draft.banned if draft.banned is not None else False,
            experience=draft.experience,
            level=level,
            until_next_level=until_next_level,
        )
        saved = await self.repository.save(record)
        logger.info("Player created", extra={"player_id": saved.id})
        return saved

    async def fetch(self, player_id: int) -> PlayerRecord:
        player_id = _check_id(player_id)
        record = await self.repository.find_by_id(player_id)
        if record is None:
            raise PlayerNotFoundError(player_id)
        return record

    async def update(self, player_id: int, patch: PlayerPatch) -> PlayerRecord:
        """Overwrite the fields present in patch, then re-derive progression."""
        player_id = _check_id(player_id)
        failures = validate_patch(patch)
        if failures:
            raise InvalidInputError("Invalid player update", failures)

        stored = await self.repository.find_by_id(player_id)
        if stored is None:
            raise PlayerNotFoundError(player_id)

        merged = replace(stored, **patch.present_fields())
        merged.level, merged.until_next_level = derive_progression(merged.experience)
        saved = await self.repository.save(merged)
        logger.info("Player updated", extra={"player_id": player_id})
        return saved

    async def delete(self, player_id: int) -> None:
        player_id = _check_id(player_id)
        if await self.repository.find_by_id(player_id) is None:
            raise PlayerNotFoundError(player_id)
        await self.repository.delete_by_id(player_id)
        logger.info("Player deleted", extra={"player_id": player_id})

    async def list(
        self,
        criteria: PlayerCriteria,
        order: PlayerOrder = PlayerOrder.ID,
        page_number: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[PlayerRecord]:
        """One zero-based page of matching players, content only."""
        if not (
            0 <= page_number <= MAX_COLUMN_INT
            and 1 <= page_size <= MAX_COLUMN_INT
        ):
            raise InvalidInputError(
                "Invalid page request", ["pageNumber", "pageSize"],
            )
        return await self.repository.scan(
            _predicate(criteria), order, page_number, page_size,
        )

    async def count(self, criteria: PlayerCriteria) -> int:
        matches = await self.repository.scan(_predicate(criteria), PlayerOrder.ID)
        return len(matches)
