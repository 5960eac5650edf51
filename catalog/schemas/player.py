"""Player Schemas: Pydantic models for the /players API boundary.

Invariants:
    - Request bodies declare no id, level or untilNextLevel: those keys are ignored
    - Request fields are all optional; presence rules live in core/validation.py
      so a missing field yields the same InvalidInput as an out-of-range one
    - birthday travels as epoch milliseconds; the core only sees UTC datetimes
    - race/profession are closed enums; unknown values fail schema validation (400)

Design Decisions:
    - untilNextLevel is an alias: the wire name stays camelCase, Python stays snake_case
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.core.domain_types import (
    PlayerDraft, PlayerPatch, PlayerRecord, Profession, Race,
    from_epoch_millis, to_epoch_millis,
)


class _PlayerFields(BaseModel):
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: int | None = None
    banned: bool | None = None
    experience: int | None = None

    @field_validator("birthday")
    @classmethod
    def check_birthday(cls, v: int | None) -> int | None:
        if v is not None:
            try:
                from_epoch_millis(v)
            except OverflowError:
                raise ValueError("birthday is out of the representable range")
        return v

    def _fields(self) -> dict:
        fields = self.model_dump()
        if self.birthday is not None:
            fields["birthday"] = from_epoch_millis(self.birthday)
        return fields


class PlayerCreate(_PlayerFields):
    """New player body. Completeness checked by the service."""

    def to_draft(self) -> PlayerDraft:
        return PlayerDraft(**self._fields())


class PlayerUpdate(_PlayerFields):
    """Partial update body. Missing or null fields leave stored values unchanged."""

    def to_patch(self) -> PlayerPatch:
        return PlayerPatch(**self._fields())


class PlayerResponse(BaseModel):
    """Public player record."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    title: str
    race: Race
    profession: Profession
    birthday: int
    banned: bool
    experience: int
    level: int
    until_next_level: int = Field(alias="untilNextLevel")

    @classmethod
    def from_record(cls, record: PlayerRecord) -> "PlayerResponse":
        return cls(
            id=record.id,
            name=record.name,
            title=record.title,
            race=record.race,
            profession=record.profession,
            birthday=to_epoch_millis(record.birthday),
            banned=record.banned,
            experience=record.experience,
            level=record.level,
            until_next_level=record.until_next_level,
        )

