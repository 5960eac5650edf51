"""Player Service: orchestration over an in-memory repository.

Tests cover:
    - create validates fully, defaults banned, derives progression
    - fetch/update/delete reject ids <= 0 or wider than BIGINT and report missing players
    - naive birthdays are read as UTC
    - update merges present fields only and always re-derives progression
    - list sorts and pages; count equals the unpaginated match size
    - paging and integer filter bounds outside column widths are InvalidInput
"""

from dataclasses import replace
from datetime import datetime

import pytest

from catalog.core.domain_types import (
    PlayerDraft, PlayerOrder, PlayerPatch, Profession, Race,
)
from catalog.core.errors import InvalidInputError, PlayerNotFoundError
from catalog.core.player_filter import PlayerCriteria
from catalog.services.player_service import PlayerService
from tests.builders import make_record, utc
from tests.services.fake_repository import InMemoryPlayerRepository


@pytest.fixture
def repository():
    return InMemoryPlayerRepository()


@pytest.fixture
def service(repository):
    return PlayerService(repository)


@pytest.fixture
def seeded(repository):
    for name, experience, race in [
        ("Ragnar", 0, Race.HUMAN),
        ("Lagertha", 1_500, Race.GIANT),
        ("Floki", 40_000, Race.ELF),
        ("Bjorn", 9_000_000, Race.HUMAN),
        ("Ivar", 300, Race.HUMAN),
    ]:
        repository._insert(make_record(name=name, experience=experience, race=race))
    return repository


# ─── create ──────────────────────────────────────────────────────

async def test_create_minimal_player(service, valid_draft):
    player = await service.create(valid_draft)
    assert player.id == 1
    assert player.level == 0
    assert player.until_next_level == 100
    assert player.banned is False


async def test_create_keeps_explicit_banned(service, valid_draft):
    player = await service.create(replace(valid_draft, banned=True))
    assert player.banned is True


async def test_create_rejects_empty_name(service, repository, valid_draft):
    with pytest.raises(InvalidInputError) as exc:
        await service.create(replace(valid_draft, name=""))
    assert exc.value.fields == ["name"]
    assert repository.saves == []


async def test_create_experience_cap(service, valid_draft):
    with pytest.raises(InvalidInputError):
        await service.create(replace(valid_draft, experience=10_000_001))
    player = await service.create(replace(valid_draft, experience=10_000_000))
    assert player.level == 446
    assert player.until_next_level == 12_800


async def test_create_reads_naive_birthday_as_utc(service, valid_draft):
    player = await service.create(replace(valid_draft, birthday=datetime(2500, 1, 1)))
    assert player.id == 1


async def test_create_rejects_naive_birthday_before_epoch(service, valid_draft):
    with pytest.raises(InvalidInputError) as exc:
        await service.create(replace(valid_draft, birthday=datetime(1969, 12, 31)))
    assert exc.value.fields == ["birthday"]


async def test_create_rejects_incomplete_draft(service):
    with pytest.raises(InvalidInputError):
        await service.create(PlayerDraft(name="Ragnar"))


# ─── fetch ───────────────────────────────────────────────────────

async def test_fetch_existing(service, seeded):
    player = await service.fetch(2)
    assert player.name == "Lagertha"


@pytest.mark.parametrize("player_id", [0, -5])
async def test_fetch_rejects_non_positive_id(service, player_id):
    with pytest.raises(InvalidInputError):
        await service.fetch(player_id)


async def test_fetch_rejects_id_wider_than_bigint(service):
    with pytest.raises(InvalidInputError):
        await service.fetch(2 ** 63)
    with pytest.raises(PlayerNotFoundError):
        await service.fetch(2 ** 63 - 1)


async def test_fetch_missing(service):
    with pytest.raises(PlayerNotFoundError):
        await service.fetch(99)


# ─── update ──────────────────────────────────────────────────────

async def test_update_missing_player(service):
    with pytest.raises(PlayerNotFoundError):
        await service.update(99, PlayerPatch(name="Ivar"))


async def test_update_rejects_negative_experience(service, seeded):
    with pytest.raises(InvalidInputError):
        await service.update(1, PlayerPatch(experience=-1))
    assert seeded.saves == []


async def test_update_validates_before_lookup(service):
    with pytest.raises(InvalidInputError):
        await service.update(99, PlayerPatch(experience=-1))


async def test_update_rejects_non_positive_id(service):
    with pytest.raises(InvalidInputError):
        await service.update(0, PlayerPatch(name="Ivar"))


async def test_update_experience_rederives_without_other_fields(service, seeded):
    player = await service.update(1, PlayerPatch(experience=5000))
    assert player.experience == 5000
    assert player.level == 9
    assert player.until_next_level == 500
    assert player.name == "Ragnar"
    assert player.race == Race.HUMAN


async def test_update_merges_only_present_fields(service, seeded):
    before = await service.fetch(3)
    player = await service.update(3, PlayerPatch(
        title="Shipwright", profession=Profession.DRUID, banned=True,
    ))
    assert player.title == "Shipwright"
    assert player.profession == Profession.DRUID
    assert player.banned is True
    assert player.id == 3
    assert player.name == before.name
    assert player.birthday == before.birthday
    assert player.experience == before.experience


async def test_update_allows_values_creation_rejects(service, seeded):
    player = await service.update(1, PlayerPatch(name="X", birthday=utc(1980)))
    assert player.name == "X"
    assert player.birthday == utc(1980)


async def test_update_repairs_stale_derived_fields(service, repository):
    repository._insert(make_record(experience=1_500, level=0, until_next_level=0))
    player = await service.update(1, PlayerPatch())
    assert (player.level, player.until_next_level) == (5, 600)


async def test_update_persists_merged_record(service, seeded):
    await service.update(2, PlayerPatch(experience=0))
    stored = await seeded.find_by_id(2)
    assert stored.level == 0
    assert stored.until_next_level == 100


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_existing(service, seeded):
    await service.delete(1)
    assert await seeded.find_by_id(1) is None


async def test_delete_missing(service):
    with pytest.raises(PlayerNotFoundError):
        await service.delete(7)


async def test_delete_rejects_non_positive_id(service):
    with pytest.raises(InvalidInputError):
        await service.delete(0)


# ─── list / count ────────────────────────────────────────────────

async def test_list_defaults_to_first_page_of_three_by_id(service, seeded):
    players = await service.list(PlayerCriteria())
    assert [p.id for p in players] == [1, 2, 3]


async def test_list_second_page(service, seeded):
    players = await service.list(PlayerCriteria(), PlayerOrder.ID, 1, 3)
    assert [p.id for p in players] == [4, 5]


async def test_list_ordered_by_name(service, seeded):
    players = await service.list(PlayerCriteria(), PlayerOrder.NAME, 0, 10)
    assert [p.name for p in players] == [
        "Bjorn", "Floki", "Ivar", "Lagertha", "Ragnar",
    ]


async def test_list_ordered_by_level_breaks_ties_by_id(service, repository):
    for experience in (100, 0, 150, 0):
        repository._insert(make_record(experience=experience))
    players = await service.list(PlayerCriteria(), PlayerOrder.LEVEL, 0, 10)
    assert [p.id for p in players] == [2, 4, 1, 3]


async def test_list_filters(service, seeded):
    players = await service.list(
        PlayerCriteria(race=Race.HUMAN, min_experience=1), PlayerOrder.EXPERIENCE, 0, 10,
    )
    assert [p.name for p in players] == ["Ivar", "Bjorn"]


async def test_list_rejects_bad_paging(service):
    with pytest.raises(InvalidInputError):
        await service.list(PlayerCriteria(), PlayerOrder.ID, -1, 3)
    with pytest.raises(InvalidInputError):
        await service.list(PlayerCriteria(), PlayerOrder.ID, 0, 0)


async def test_list_rejects_page_past_offset_range(service):
    with pytest.raises(InvalidInputError):
        await service.list(PlayerCriteria(), PlayerOrder.ID, 2 ** 31, 3)
    with pytest.raises(InvalidInputError):
        await service.list(PlayerCriteria(), PlayerOrder.ID, 0, 2 ** 31)


async def test_list_rejects_integer_bounds_wider_than_column(service):
    with pytest.raises(InvalidInputError) as exc:
        await service.list(PlayerCriteria(min_experience=2 ** 40, max_level=-(2 ** 40)))
    assert exc.value.fields == ["min_experience", "max_level"]


async def test_count_rejects_integer_bounds_wider_than_column(service):
    with pytest.raises(InvalidInputError):
        await service.count(PlayerCriteria(max_experience=2 ** 31))


async def test_list_rejects_unrepresentable_birthday_bound(service):
    with pytest.raises(InvalidInputError):
        await service.list(PlayerCriteria(after=10 ** 18))


async def test_count_matches_list_without_truncation(service, seeded):
    for criteria in (
        PlayerCriteria(),
        PlayerCriteria(race=Race.HUMAN),
        PlayerCriteria(name="a"),
        PlayerCriteria(min_level=1, max_level=30),
        PlayerCriteria(banned=True),
    ):
        listed = await service.list(criteria, PlayerOrder.NAME, 0, 10_000)
        assert await service.count(criteria) == len(listed)


async def test_count_all(service, seeded):
    assert await service.count(PlayerCriteria()) == 5
