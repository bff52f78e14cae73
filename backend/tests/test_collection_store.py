import pytest

from conftest import ALICE, BOB
from errors import NotFoundError, ValidationError
from services.collection_store import CollectionStore


def test_create_defaults(db):
    collection = CollectionStore(db).create(ALICE, name="Reading")

    assert collection.description == ""
    assert collection.icon is None
    assert collection.color is None
    assert collection.is_shared is False
    assert collection.sort_order > 0


def test_default_sort_order_does_not_decrease(db):
    store = CollectionStore(db)
    first = store.create(ALICE, name="First")
    second = store.create(ALICE, name="Second")

    assert second.sort_order >= first.sort_order
    assert [c.name for c in store.list_by_owner(ALICE)] == ["First", "Second"]


def test_create_requires_name(db):
    with pytest.raises(ValidationError):
        CollectionStore(db).create(ALICE, name="  ")


def test_list_by_owner_orders_by_sort_order(db):
    store = CollectionStore(db)
    store.create(ALICE, name="Third", sort_order=30)
    store.create(ALICE, name="First", sort_order=10)
    store.create(ALICE, name="Second", sort_order=20)
    store.create(BOB, name="Not mine", sort_order=15)

    assert [c.name for c in store.list_by_owner(ALICE)] == ["First", "Second", "Third"]


def test_list_shared_spans_users(db):
    store = CollectionStore(db)
    store.create(ALICE, name="Alice shared", is_shared=True, sort_order=2)
    store.create(BOB, name="Bob shared", is_shared=True, sort_order=1)
    store.create(BOB, name="Bob private", sort_order=0)

    assert [c.name for c in store.list_shared()] == ["Bob shared", "Alice shared"]


def test_update_partial_merge(db):
    store = CollectionStore(db)
    collection = store.create(
        ALICE, name="Reading", description="Long reads", color="#ff0000"
    )

    store.update(ALICE, collection.id, {"is_shared": True})

    db.expire_all()
    saved = store.get(ALICE, collection.id)
    assert saved.is_shared is True
    assert saved.name == "Reading"
    assert saved.description == "Long reads"
    assert saved.color == "#ff0000"


def test_update_other_users_collection_is_not_found(db):
    store = CollectionStore(db)
    collection = store.create(BOB, name="Bob's")

    with pytest.raises(NotFoundError):
        store.update(ALICE, collection.id, {"name": "Mine now"})


def test_reorder_assigns_positions(db):
    store = CollectionStore(db)
    a = store.create(ALICE, name="A", sort_order=1)
    b = store.create(ALICE, name="B", sort_order=2)
    c = store.create(ALICE, name="C", sort_order=3)

    ordered = store.reorder(ALICE, [c.id, a.id, b.id])

    assert [col.name for col in ordered] == ["C", "A", "B"]
    assert [col.sort_order for col in ordered] == [1, 2, 3]


def test_reorder_with_foreign_id_changes_nothing(db):
    store = CollectionStore(db)
    a = store.create(ALICE, name="A", sort_order=5)
    bobs = store.create(BOB, name="Bob's", sort_order=6)

    with pytest.raises(NotFoundError):
        store.reorder(ALICE, [bobs.id, a.id])

    db.expire_all()
    assert store.get(ALICE, a.id).sort_order == 5
