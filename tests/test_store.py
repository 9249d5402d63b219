import asyncio
import time

import pytest
from sqlalchemy import event

from app.core.errors import BackendFailure
from app.db.sql_store import SqlRecordStore
from app.db.store import PILOTS, STAFF, TEAMS
from app.utils.fanout import gather_all


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def store(session_factory):
    store = SqlRecordStore(session_factory())
    yield store
    run(store.close())


def test_insert_assigns_id_and_timestamps(store):
    team = run(store.insert(TEAMS, {"name": "A", "number_of_pilots": 4, "representative_user_id": "u1"}))

    assert team["id"]
    assert team["created_at"] is not None
    assert team["updated_at"] is not None
    assert run(store.get(TEAMS, {"representative_user_id": "u1"}))["id"] == team["id"]


def test_filtered_count_and_ordering(store):
    team = run(store.insert(TEAMS, {"name": "A", "number_of_pilots": 4, "representative_user_id": "u1"}))
    for name in ("first", "second", "third"):
        run(store.insert(STAFF, {"team_id": team["id"], "name": name, "role": "support"}))
    run(store.insert(STAFF, {"team_id": "other", "name": "elsewhere", "role": "mechanic"}))

    assert run(store.count(STAFF)) == 4
    assert run(store.count(STAFF, {"team_id": team["id"]})) == 3
    newest_first = run(store.list(STAFF, {"team_id": team["id"]}, ("created_at", True)))
    assert [s["name"] for s in newest_first] == ["third", "second", "first"]


def test_update_and_delete_missing_records(store):
    assert run(store.update(TEAMS, "nope", {"name": "B"})) is None
    assert run(store.delete(TEAMS, "nope")) is False


def test_integrity_errors_become_backend_failures(store):
    run(store.insert(TEAMS, {"name": "A", "number_of_pilots": 4, "representative_user_id": "u1"}))

    with pytest.raises(BackendFailure):
        run(store.insert(TEAMS, {"name": "B", "number_of_pilots": 4, "representative_user_id": "u1"}))


def test_gather_all_waits_for_every_operation_before_failing():
    finished = []

    async def ok(delay, name):
        await asyncio.sleep(delay)
        finished.append(name)
        return name

    async def boom():
        raise RuntimeError("child delete failed")

    async def scenario():
        return await gather_all(ok(0.01, "slow"), boom(), ok(0, "fast"))

    with pytest.raises(RuntimeError, match="child delete failed"):
        run(scenario())
    assert sorted(finished) == ["fast", "slow"]


def test_gather_all_keeps_order():
    async def value(v):
        return v

    async def scenario():
        return await gather_all(value(1), value(2), value(3))

    assert run(scenario()) == [1, 2, 3]


def test_slow_queries_do_not_block_the_event_loop(store, session_factory):
    engine = session_factory.kw["bind"]

    def slow_query(*args):
        time.sleep(0.3)

    async def scenario():
        done = asyncio.Event()
        lag = 0.0

        async def ticker():
            nonlocal lag
            loop = asyncio.get_running_loop()
            while not done.is_set():
                start = loop.time()
                await asyncio.sleep(0.01)
                lag = max(lag, loop.time() - start - 0.01)

        task = asyncio.create_task(ticker())
        try:
            await gather_all(
                store.list(PILOTS, {"team_id": "t1"}),
                store.list(STAFF, {"team_id": "t1"}),
            )
        finally:
            done.set()
            await task
        return lag

    event.listen(engine, "before_cursor_execute", slow_query)
    try:
        lag = run(scenario())
    finally:
        event.remove(engine, "before_cursor_execute", slow_query)

    assert lag < 0.2
