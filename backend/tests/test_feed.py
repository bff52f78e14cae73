import pytest

from conftest import ALICE, BOB, assert_memberships_consistent
from errors import ConflictError, NotFoundError
from models import Resource
from services.collection_store import CollectionStore
from services.feed import PublicFeed
from services.resource_store import ResourceStore


def _resource(db, owner, title, link, is_public):
    return ResourceStore(db).create(
        owner, title=title, link=link, tag="Article", is_public=is_public
    )


def test_feed_shows_only_other_users_public_resources(db):
    first = _resource(db, ALICE, "First", "https://a.example.com", True)
    second = _resource(db, ALICE, "Second", "https://b.example.com", True)
    _resource(db, ALICE, "Private", "https://c.example.com", False)
    _resource(db, BOB, "Bob's own", "https://d.example.com", True)

    feed = PublicFeed(db).list_public(BOB)

    assert {r.id for r in feed} == {first.id, second.id}


def test_feed_is_empty_for_the_only_publisher(db):
    _resource(db, ALICE, "Mine", "https://a.example.com", True)

    assert PublicFeed(db).list_public(ALICE) == []


def test_save_from_feed_makes_private_copy(db):
    reading = CollectionStore(db).create(ALICE, name="Reading")
    source = ResourceStore(db).create(
        ALICE,
        title="Great read",
        link="https://example.com/post",
        tag="Article",
        note="worth it",
        is_public=True,
        collection_ids=[reading.id],
    )

    copy = PublicFeed(db).save_from_feed(BOB, source.id)

    db.expire_all()
    saved = db.get(Resource, copy.id)
    assert saved.id != source.id
    assert saved.owner_id == BOB
    assert saved.is_public is False
    assert saved.collection_ids == []
    assert (saved.title, saved.link, saved.tag, saved.note) == (
        "Great read",
        "https://example.com/post",
        "Article",
        "worth it",
    )
    assert_memberships_consistent(db)


def test_save_duplicate_link_is_conflict(db):
    source = _resource(db, ALICE, "Post", "https://example.com/post", True)
    _resource(db, BOB, "Already have it", "https://example.com/post", False)

    with pytest.raises(ConflictError):
        PublicFeed(db).save_from_feed(BOB, source.id)

    assert db.query(Resource).filter(Resource.owner_id == BOB).count() == 1


def test_save_twice_is_conflict(db):
    source = _resource(db, ALICE, "Post", "https://example.com/post", True)
    feed = PublicFeed(db)

    feed.save_from_feed(BOB, source.id)
    with pytest.raises(ConflictError):
        feed.save_from_feed(BOB, source.id)


def test_save_private_resource_is_not_found(db):
    source = _resource(db, ALICE, "Secret", "https://example.com/secret", False)

    with pytest.raises(NotFoundError):
        PublicFeed(db).save_from_feed(BOB, source.id)
    assert db.query(Resource).count() == 1


def test_save_missing_resource_is_not_found(db):
    with pytest.raises(NotFoundError):
        PublicFeed(db).save_from_feed(BOB, "missing")
