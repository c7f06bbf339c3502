"""Unit tests for the category view model."""

import pytest

from jokefeed.features.fetch.config import ApiEndpoints
from jokefeed.features.fetch.errors import RequestError
from jokefeed.features.fetch.result import Failure, Success
from jokefeed.screens.base import Refresh
from jokefeed.screens.category.view_model import DEFAULT_ITEM_COUNT, CategoryViewModel
from tests.helpers.fakes import GatedJsonClient, ScriptedJsonClient, make_item


ENDPOINTS = ApiEndpoints(base_url="https://api.test")
DEV_URL = "https://api.test/jokes/random?category=dev"


def make_view_model(client: object, **kwargs: object) -> CategoryViewModel:
    return CategoryViewModel("dev", client, endpoints=ENDPOINTS, **kwargs)  # type: ignore[arg-type]


class TestFetchCycle:
    """Tests for one burst of item fetches."""

    @pytest.mark.asyncio
    async def test_five_distinct_items(self) -> None:
        """Test five distinct items are shown in arrival order."""
        client = ScriptedJsonClient().queue_items(DEV_URL, "a", "b", "c", "d", "e")
        view_model = make_view_model(client)

        view_model.activate()
        await view_model.wait_until_idle()

        state = view_model.state
        assert state.items == ("a", "b", "c", "d", "e")
        assert state.is_loading is False
        assert state.error_message is None
        assert state.action_disabled is False
        assert client.calls == [DEV_URL] * DEFAULT_ITEM_COUNT

    @pytest.mark.asyncio
    async def test_duplicates_dropped(self) -> None:
        """Test repeated texts are shown once, first occurrence kept."""
        client = ScriptedJsonClient().queue_items(DEV_URL, "a", "a", "b", "b", "b")
        view_model = make_view_model(client)

        view_model.activate()
        await view_model.wait_until_idle()

        assert view_model.state.items == ("a", "b")

    @pytest.mark.asyncio
    async def test_duplicate_text_with_different_id(self) -> None:
        """Test duplicates are detected by text, not by id."""
        client = ScriptedJsonClient().queue(
            DEV_URL,
            Success(make_item("same", item_id="1")),
            Success(make_item("same", item_id="2")),
        )
        view_model = make_view_model(client, item_count=2)

        view_model.activate()
        await view_model.wait_until_idle()

        assert view_model.state.items == ("same",)

    @pytest.mark.asyncio
    async def test_first_failure_aborts(self) -> None:
        """Test the cycle stops at the first failure and reports it."""
        client = ScriptedJsonClient().queue(
            DEV_URL,
            Success(make_item("a")),
            Failure(RequestError.server_response(500)),
            Success(make_item("never")),
        )
        view_model = make_view_model(client)

        view_model.activate()
        await view_model.wait_until_idle()

        state = view_model.state
        assert state.error_message == "A data request error occurred. (code: 500)"
        assert state.items == ()
        assert state.is_loading is False
        assert state.action_disabled is False
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_client_exception_aborts(self) -> None:
        """Test an exception escaping the client ends the cycle as a failure."""
        client = ScriptedJsonClient().queue(DEV_URL, ValueError("broken"))
        view_model = make_view_model(client)

        view_model.activate()
        await view_model.wait_until_idle()

        assert view_model.state.error_message == "broken"
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_requests_are_sequential(self) -> None:
        """Test the next request starts only after the previous settles."""
        client = GatedJsonClient()
        view_model = make_view_model(client, item_count=2)
        view_model.activate()

        await client.wait_for_calls(1)
        assert len(client.pending) == 1
        assert view_model.state.is_loading is True

        client.pending[0].succeed(make_item("a"))
        await client.wait_for_calls(2)
        assert view_model.state.is_loading is True
        assert view_model.state.items == ()

        client.pending[1].succeed(make_item("b"))
        await view_model.wait_until_idle()

        assert view_model.state.items == ("a", "b")

    @pytest.mark.asyncio
    async def test_category_in_url(self) -> None:
        """Test the category name is sent in the request URL."""
        client = ScriptedJsonClient().queue_items(
            "https://api.test/jokes/random?category=science%20fiction", "x"
        )
        view_model = CategoryViewModel(
            "science fiction", client, endpoints=ENDPOINTS, item_count=1
        )

        view_model.activate()
        await view_model.wait_until_idle()

        assert view_model.state.items == ("x",)
        assert view_model.state.category_name == "science fiction"

    def test_item_count_must_be_positive(self) -> None:
        """Test a burst needs at least one fetch."""
        with pytest.raises(ValueError, match="item_count"):
            make_view_model(ScriptedJsonClient(), item_count=0)


class TestRefresh:
    """Tests for refreshing the category."""

    @pytest.mark.asyncio
    async def test_refresh_reloads(self) -> None:
        """Test refresh clears the list and fetches a new burst."""
        client = ScriptedJsonClient().queue_items(DEV_URL, "a", "b")
        view_model = make_view_model(client, item_count=1)
        view_model.activate()
        await view_model.wait_until_idle()

        view_model.send(Refresh())
        assert view_model.state.is_loading is True
        assert view_model.state.items == ()
        await view_model.wait_until_idle()

        assert view_model.state.items == ("b",)

    @pytest.mark.asyncio
    async def test_refresh_after_failure_clears_error(self) -> None:
        """Test a new cycle clears the previous error."""
        client = ScriptedJsonClient().queue(
            DEV_URL, Failure(RequestError.unexpected("down")), Success(make_item("ok"))
        )
        view_model = make_view_model(client, item_count=1)
        view_model.activate()
        await view_model.wait_until_idle()
        assert view_model.state.error_message == "down"

        view_model.send(Refresh())
        assert view_model.state.error_message is None
        await view_model.wait_until_idle()

        assert view_model.state.items == ("ok",)

    @pytest.mark.asyncio
    async def test_stale_cycle_discarded_when_enabled(self) -> None:
        """Test a superseded burst does not overwrite the newer one."""
        client = GatedJsonClient()
        view_model = make_view_model(client, item_count=1, discard_stale_results=True)
        view_model.activate()
        view_model.send(Refresh())
        await client.wait_for_calls(2)

        client.pending[1].succeed(make_item("new"))
        client.pending[0].succeed(make_item("old"))
        await view_model.wait_until_idle()

        assert view_model.state.items == ("new",)

    @pytest.mark.asyncio
    async def test_stale_cycle_applied_by_default(self) -> None:
        """Test the last burst to settle wins when discarding is off."""
        client = GatedJsonClient()
        view_model = make_view_model(client, item_count=1)
        view_model.activate()
        view_model.send(Refresh())
        await client.wait_for_calls(2)

        client.pending[1].succeed(make_item("new"))
        client.pending[0].succeed(make_item("old"))
        await view_model.wait_until_idle()

        assert view_model.state.items == ("old",)

    @pytest.mark.asyncio
    async def test_unknown_event_rejected(self) -> None:
        """Test unsupported events raise TypeError."""
        with pytest.raises(TypeError):
            make_view_model(ScriptedJsonClient()).send("reload")  # type: ignore[arg-type]
