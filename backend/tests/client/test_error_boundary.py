"""Error Boundary — fallback on render exceptions, manual reset."""

import httpx
import pytest

from userhub.client.error_boundary import (
    FALLBACK_TITLE, RESET_LABEL, ErrorBoundary,
)
from userhub.client.user_list import UserList
from userhub.infrastructure.observability import InMemorySink


class _FlakyView:
    def __init__(self):
        self.broken = True

    def render(self) -> str:
        if self.broken:
            raise ValueError("render exploded")
        return "all good"


def test_renders_child_when_healthy():
    boundary = ErrorBoundary(lambda: "hello")
    assert boundary.render() == "hello"
    assert boundary.has_error is False


def test_render_exception_shows_fallback():
    sink = InMemorySink()
    boundary = ErrorBoundary(_FlakyView().render, name="Flaky", sink=sink)

    output = boundary.render()

    assert FALLBACK_TITLE in output
    assert RESET_LABEL in output
    assert boundary.has_error is True
    assert sink.errors[-1].message == "render exploded"
    assert sink.errors[-1].context == {"component": "Flaky"}


def test_fallback_persists_until_reset():
    view = _FlakyView()
    boundary = ErrorBoundary(view.render)
    boundary.render()
    view.broken = False

    assert FALLBACK_TITLE in boundary.render()

    boundary.reset()
    assert boundary.render() == "all good"
    assert boundary.has_error is False


def test_details_only_when_enabled():
    hidden = ErrorBoundary(_FlakyView().render).render()
    shown = ErrorBoundary(_FlakyView().render, show_details=True).render()
    assert "render exploded" not in hidden
    assert "ValueError('render exploded')" in shown
    assert "Traceback" in shown


def test_base_exceptions_are_not_caught():
    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        ErrorBoundary(interrupt).render()


async def test_request_failures_do_not_trip_boundary(scripted_client):
    client = scripted_client(
        lambda request: httpx.Response(500, json={"error": "database down"}),
    )
    user_list = UserList(client)
    boundary = ErrorBoundary(user_list.render)

    await user_list.mount()

    assert "Error: database down" in boundary.render()
    assert boundary.has_error is False
