"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Storage is reached only through PlayerRepository
    - Implementations guarantee atomic single-record writes

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQL repository and the test
      fake share no base class
    - Async in Protocol: implementations do IO; the pure core functions that feed
      them (validation, progression, predicate building) stay synchronous
"""

from typing import Protocol

from catalog.core.domain_types import PlayerId, PlayerOrder, PlayerRecord
from catalog.core.player_filter import PlayerPredicate


class PlayerRepository(Protocol):
    """Contract for player persistence. Implemented by shell."""
    async def find_by_id(self, player_id: PlayerId) -> PlayerRecord | None: ...
    async def save(self, record: PlayerRecord) -> PlayerRecord: ...
    async def delete_by_id(self, player_id: PlayerId) -> None: ...
    async def scan(
        self,
        predicate: PlayerPredicate,
        order: PlayerOrder,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> list[PlayerRecord]: ...
