import pytest

from conftest import ALICE, BOB
from errors import ConflictError, NotFoundError, ValidationError
from services.profile import ProfileService
from services.resource_store import ResourceStore


def test_stats_counts_public_and_private(db):
    store = ResourceStore(db)
    for i in range(5):
        store.create(
            ALICE,
            title=f"R{i}",
            link=f"https://example.com/{i}",
            tag="Tool",
            is_public=i < 2,
        )
    store.create(BOB, title="Bob", link="https://example.com/bob", tag="Tool")

    assert ProfileService(db).stats(ALICE) == {"total": 5, "public": 2, "private": 3}


def test_stats_for_empty_vault(db):
    assert ProfileService(db).stats(ALICE) == {"total": 0, "public": 0, "private": 0}


@pytest.mark.parametrize(
    "username", ["ab", "Alice", "has space", "a" * 21, "", "alice\n"]
)
def test_upsert_rejects_bad_username(db, username):
    with pytest.raises(ValidationError):
        ProfileService(db).upsert_profile(ALICE, username, "alice@example.com")


def test_upsert_creates_then_merges(db):
    service = ProfileService(db)
    created = service.upsert_profile(ALICE, "alice", "alice@example.com")
    first_created_at = created.created_at

    updated = service.upsert_profile(
        ALICE, "alice_2", "alice@example.com", share_by_default=True
    )

    assert updated.username == "alice_2"
    assert updated.share_by_default is True
    assert updated.created_at == first_created_at


def test_username_taken_by_another_user_is_conflict(db):
    service = ProfileService(db)
    service.upsert_profile(ALICE, "alice", "alice@example.com")

    with pytest.raises(ConflictError):
        service.upsert_profile(BOB, "alice", "bob@example.com")
    with pytest.raises(NotFoundError):
        service.get_profile(BOB)


def test_update_profile_is_partial(db):
    service = ProfileService(db)
    service.upsert_profile(ALICE, "alice", "alice@example.com")

    user = service.update_profile(ALICE, {"share_by_default": True})

    assert user.username == "alice"
    assert user.share_by_default is True


def test_update_profile_rejects_taken_username(db):
    service = ProfileService(db)
    service.upsert_profile(ALICE, "alice", "alice@example.com")
    service.upsert_profile(BOB, "bob", "bob@example.com")

    with pytest.raises(ConflictError):
        service.update_profile(BOB, {"username": "alice"})
    db.expire_all()
    assert service.get_profile(BOB).username == "bob"


def test_update_missing_profile_is_not_found(db):
    with pytest.raises(NotFoundError):
        ProfileService(db).update_profile(ALICE, {"share_by_default": True})


def test_check_username(db):
    service = ProfileService(db)
    service.upsert_profile(ALICE, "alice", "alice@example.com")

    assert service.check_username("alice") == (False, None)
    assert service.check_username("fresh-name") == (True, None)
    available, error = service.check_username("No")
    assert available is False
    assert "3-20 characters" in error


def test_check_username_treats_own_name_as_available(db):
    service = ProfileService(db)
    service.upsert_profile(ALICE, "alice", "alice@example.com")

    assert service.check_username("alice", ALICE) == (True, None)
    assert service.check_username("alice", BOB) == (False, None)


def test_check_username_rejects_trailing_newline(db):
    available, error = ProfileService(db).check_username("alice\n")

    assert available is False
    assert error is not None
