"""User List — loading/empty/nonempty/error states and refresh semantics."""

import asyncio

import httpx

from userhub.client.user_list import UserList
from userhub.core.domain_types import ListStatus
from userhub.db.base import Base


async def test_starts_loading(api_client):
    user_list = UserList(api_client)
    assert user_list.status is ListStatus.LOADING
    assert "Loading users..." in user_list.render()


async def test_mount_on_empty_storage(api_client):
    user_list = UserList(api_client)
    await user_list.mount()
    assert user_list.status is ListStatus.EMPTY
    assert "No users found." in user_list.render()


async def test_mount_renders_users(api_client):
    await api_client.create_user("Jane Smith", "jane@example.com")
    await api_client.create_user("John Doe", "john@example.com")

    user_list = UserList(api_client)
    await user_list.mount()

    assert user_list.status is ListStatus.LOADED
    assert user_list.render().splitlines()[1:] == [
        "Jane Smith - jane@example.com",
        "John Doe - john@example.com",
    ]


async def test_refresh_picks_up_new_users(api_client):
    user_list = UserList(api_client)
    await user_list.mount()
    await api_client.create_user("Jane Smith", "jane@example.com")

    await user_list.refresh()

    assert [u["name"] for u in user_list.users] == ["Jane Smith"]


async def test_server_error_state(scripted_client):
    client = scripted_client(
        lambda request: httpx.Response(500, json={"error": "no such table: users"}),
    )
    user_list = UserList(client)
    await user_list.mount()
    assert user_list.status is ListStatus.ERROR
    assert user_list.error == "no such table: users"
    assert "Error: no such table: users" in user_list.render()


async def test_recovers_after_error(api_client, drop_users_table, test_engine):
    user_list = UserList(api_client)
    await drop_users_table()
    await user_list.mount()
    assert user_list.status is ListStatus.ERROR

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await user_list.refresh()
    assert user_list.status is ListStatus.EMPTY
    assert user_list.error is None


async def test_overlapping_refreshes_last_response_wins(scripted_client):
    second_arrived = asyncio.Event()
    calls = []
    slow_body = [{"id": 1, "name": "Slow", "email": "slow@example.com"}]

    async def handler(request):
        calls.append(request)
        if len(calls) == 1:
            await second_arrived.wait()
            await asyncio.sleep(0.05)
            return httpx.Response(200, json=slow_body)
        second_arrived.set()
        return httpx.Response(200, json=[])

    user_list = UserList(scripted_client(handler))
    await asyncio.gather(user_list.refresh(), user_list.refresh())

    assert user_list.users == slow_body
    assert user_list.status is ListStatus.LOADED
