import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core.exceptions import ServiceUnavailable

from app.core.errors import BackendFailure
from app.db.firestore_store import FirestoreRecordStore
from app.db.store import PILOTS, STAFF, TEAMS


def test_children_with_team_id_use_subcollection():
    client = MagicMock()
    store = FirestoreRecordStore(client)

    ref, rest, team_id = store._collection(PILOTS, {"team_id": "t1", "dni": "123"})

    client.collection.assert_called_once_with(TEAMS)
    client.collection.return_value.document.assert_called_once_with("t1")
    client.collection.return_value.document.return_value.collection.assert_called_once_with(PILOTS)
    assert ref is client.collection.return_value.document.return_value.collection.return_value
    assert rest == {"dni": "123"}
    assert team_id == "t1"


def test_children_without_team_id_use_collection_group():
    client = MagicMock()
    store = FirestoreRecordStore(client)

    ref, rest, team_id = store._collection(STAFF, {"id": "s1"})

    client.collection_group.assert_called_once_with(STAFF)
    assert ref is client.collection_group.return_value
    assert rest == {"id": "s1"}
    assert team_id is None


def test_top_level_collections():
    client = MagicMock()
    store = FirestoreRecordStore(client)

    ref, rest, _ = store._collection(TEAMS, {"representative_user_id": "u1"})

    client.collection.assert_called_once_with(TEAMS)
    assert rest == {"representative_user_id": "u1"}


def run(coro):
    return asyncio.run(coro)


def snapshot(doc_id, data=None, exists=True):
    doc = MagicMock(id=doc_id, exists=exists)
    doc.to_dict.return_value = dict(data or {})
    return doc


def stream_of(*docs):
    async def _stream():
        for doc in docs:
            yield doc
    return _stream


def test_owned_child_is_read_directly():
    client = MagicMock()
    pilots = client.collection.return_value.document.return_value.collection.return_value
    pilots.document.return_value.get = AsyncMock(return_value=snapshot("p1", {"team_id": "t1", "name": "Carlos"}))

    record = run(FirestoreRecordStore(client).get(PILOTS, {"id": "p1", "team_id": "t1"}))

    assert record == {"id": "p1", "team_id": "t1", "name": "Carlos"}
    client.collection.return_value.document.assert_called_once_with("t1")
    pilots.document.assert_called_once_with("p1")
    client.collection_group.assert_not_called()


def test_child_of_another_team_is_not_found():
    client = MagicMock()
    pilots = client.collection.return_value.document.return_value.collection.return_value
    pilots.document.return_value.get = AsyncMock(return_value=snapshot("p1", exists=False))

    assert run(FirestoreRecordStore(client).get(PILOTS, {"id": "p1", "team_id": "t1"})) is None


def test_direct_read_checks_remaining_filters():
    client = MagicMock()
    teams = client.collection.return_value
    teams.document.return_value.get = AsyncMock(
        return_value=snapshot("t1", {"representative_user_id": "someone-else"})
    )
    store = FirestoreRecordStore(client)

    assert run(store.get(TEAMS, {"id": "t1", "representative_user_id": "u1"})) is None
    assert run(store.get(TEAMS, {"id": "t1", "representative_user_id": "someone-else"}))["id"] == "t1"


def test_child_without_team_falls_back_to_collection_group():
    client = MagicMock()
    group = client.collection_group.return_value
    group.where.return_value.limit.return_value.stream = stream_of(snapshot("s1", {"team_id": "t9"}))

    record = run(FirestoreRecordStore(client).get(STAFF, {"id": "s1"}))

    assert record == {"id": "s1", "team_id": "t9"}
    client.collection_group.assert_called_once_with(STAFF)
    group.where.return_value.limit.assert_called_once_with(1)
    condition = group.where.call_args.kwargs["filter"]
    assert (condition.field_path, condition.op_string, condition.value) == ("id", "==", "s1")


def test_update_and_delete_missing_documents():
    client = MagicMock()
    team_ref = client.collection.return_value.document.return_value
    team_ref.get = AsyncMock(return_value=snapshot("nope", exists=False))
    team_ref.update = AsyncMock()
    client.collection_group.return_value.where.return_value.limit.return_value.stream = stream_of()
    store = FirestoreRecordStore(client)

    assert run(store.update(TEAMS, "nope", {"name": "B"})) is None
    assert run(store.delete(PILOTS, "p9")) is False
    team_ref.update.assert_not_awaited()


def test_update_child_found_through_collection_group():
    client = MagicMock()
    ref = MagicMock()
    ref.update = AsyncMock()
    ref.get = AsyncMock(return_value=snapshot("p1", {"team_id": "t1", "name": "Nuevo"}))
    found = snapshot("p1")
    found.reference = ref
    client.collection_group.return_value.where.return_value.limit.return_value.stream = stream_of(found)

    record = run(FirestoreRecordStore(client).update(PILOTS, "p1", {"name": "Nuevo", "id": "other"}))

    assert record == {"id": "p1", "team_id": "t1", "name": "Nuevo"}
    written = ref.update.await_args.args[0]
    assert written["name"] == "Nuevo"
    assert "id" not in written
    assert "updated_at" in written


def test_count_unwraps_aggregation_result():
    client = MagicMock()
    query = client.collection.return_value.where.return_value
    query.count.return_value.get = AsyncMock(return_value=[[MagicMock(value=3)]])

    assert run(FirestoreRecordStore(client).count(TEAMS, {"status": "confirmed"})) == 3


def test_api_errors_become_backend_failures():
    client = MagicMock()
    client.collection.return_value.document.return_value.get = AsyncMock(side_effect=ServiceUnavailable("down"))
    store = FirestoreRecordStore(client)

    with pytest.raises(BackendFailure):
        run(store.get(TEAMS, {"id": "t1"}))
    with pytest.raises(BackendFailure):
        run(store.insert(PILOTS, {"name": "sem equipe"}))
