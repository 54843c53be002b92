# Copyright 2025 The Venddy Search Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from payloads import vendor_json
from venddy_search.clients import VenddyClient
from venddy_search.data_models.config import VenddyConfig
from venddy_search.data_models.taxonomy import TaxonomyIndex, TaxonomyTable
from venddy_search.data_models.vendors import SearchResultPage, VendorRecord
from venddy_search.exceptions import SearchFetchError
from venddy_search.services import (
    SearchbarListener,
    SearchSession,
    create_listener,
)
from venddy_search.taxonomy import TaxonomyCache


def _page(query: str, count: int, remaining: int, cursor: int = 0) -> SearchResultPage:
    return SearchResultPage(
        query_text=query,
        results=[
            VendorRecord.model_validate(
                vendor_json(f"v{cursor + i}", f"Vendor {cursor + i}", Categories=["c1"])
            )
            for i in range(count)
        ],
        remaining_count=remaining,
        cursor=cursor,
    )


class FakePresenter:
    def __init__(self) -> None:
        self.menus = []
        self.documents = []

    async def show_menu(self, label, elements):
        self.menus.append((label, elements))

    async def show_document(self, label, markdown):
        self.documents.append((label, markdown))

    @property
    def last_menu(self):
        return self.menus[-1][1]


@pytest.fixture
def mock_client():
    client = Mock(spec=VenddyClient)
    client.search = AsyncMock()
    return client


@pytest.fixture
def taxonomy_cache():
    cache = Mock(spec=TaxonomyCache)
    cache.get = AsyncMock(
        return_value=TaxonomyIndex.from_tables(
            {TaxonomyTable.CATEGORY: {"c1": "Cloud"}}
        )
    )
    return cache


@pytest.fixture
def presenter():
    return FakePresenter()


@pytest.fixture
def session(mock_client, presenter, taxonomy_cache):
    return SearchSession(
        mock_client, presenter, "acme", page_size=10, taxonomy_cache=taxonomy_cache
    )


@pytest.mark.asyncio
class TestSearchSession:
    async def test_start_renders_enriched_menu(
        self, session, mock_client, presenter, taxonomy_cache
    ):
        mock_client.search.return_value = _page("acme", 3, remaining=5)

        assert await session.start() is True

        mock_client.search.assert_awaited_once_with("acme", 10, 0)
        taxonomy_cache.get.assert_awaited_once_with(mock_client)
        label, elements = presenter.menus[0]
        assert label == "Venddy Search"
        assert elements["next"].order == 6
        assert "prev" not in elements
        assert session.page.results[0].category_names == "- Cloud\n"

    async def test_empty_page_skips_taxonomy(
        self, session, mock_client, presenter, taxonomy_cache
    ):
        mock_client.search.return_value = _page("acme", 0, remaining=0)

        await session.start()

        taxonomy_cache.get.assert_not_awaited()
        assert list(presenter.last_menu) == ["header1"]

    async def test_start_failure_shows_no_results(
        self, session, mock_client, presenter
    ):
        mock_client.search.side_effect = SearchFetchError("timeout", retryable=True)

        assert await session.start() is False

        assert list(presenter.last_menu) == ["header1"]
        assert "No results for acme" in presenter.last_menu["header1"].body

    async def test_next_then_previous_refetches(self, session, mock_client, presenter):
        mock_client.search.side_effect = [
            _page("acme", 3, remaining=5),
            _page("acme", 2, remaining=0, cursor=10),
            _page("acme", 3, remaining=5),
        ]

        await session.start()
        await presenter.last_menu["next"].on_select()

        assert session.state.cursor == 10
        assert "next" not in presenter.last_menu
        assert presenter.last_menu["prev"].order == 6

        await presenter.last_menu["prev"].on_select()

        assert session.state.cursor == 0
        assert [c.args for c in mock_client.search.await_args_list] == [
            ("acme", 10, 0),
            ("acme", 10, 10),
            ("acme", 10, 0),
        ]
        assert len(presenter.menus) == 3

    async def test_navigation_failure_keeps_previous_menu(
        self, session, mock_client, presenter
    ):
        mock_client.search.side_effect = [
            _page("acme", 3, remaining=5),
            SearchFetchError("boom"),
        ]

        await session.start()
        assert await session.next_page() is False

        assert session.state.cursor == 0
        assert len(presenter.menus) == 1

    async def test_presenter_can_navigate_from_inside_show_menu(
        self, mock_client, taxonomy_cache
    ):
        class SelectingPresenter(FakePresenter):
            async def show_menu(self, label, elements):
                await super().show_menu(label, elements)
                if len(self.menus) == 1:
                    await elements["next"].on_select()

        presenter = SelectingPresenter()
        session = SearchSession(
            mock_client, presenter, "acme", taxonomy_cache=taxonomy_cache
        )
        mock_client.search.side_effect = [
            _page("acme", 10, remaining=5),
            _page("acme", 5, remaining=0, cursor=10),
        ]

        assert await asyncio.wait_for(session.start(), timeout=2) is True

        assert len(presenter.menus) == 2
        assert session.state.cursor == 10
        assert "prev" in presenter.last_menu

    async def test_next_without_more_results_is_ignored(self, session, mock_client):
        mock_client.search.return_value = _page("acme", 3, remaining=0)

        await session.start()

        assert await session.next_page() is False
        assert mock_client.search.await_count == 1

    async def test_previous_on_first_page_is_ignored(self, session, mock_client):
        mock_client.search.return_value = _page("acme", 3, remaining=0)

        await session.start()

        assert await session.previous_page() is False
        assert mock_client.search.await_count == 1

    async def test_next_before_start_is_ignored(self, session, mock_client):
        assert await session.next_page() is False
        mock_client.search.assert_not_awaited()

    async def test_selecting_vendor_shows_detail(self, session, mock_client, presenter):
        mock_client.search.return_value = _page("acme", 3, remaining=0)

        await session.start()
        await presenter.last_menu["1"].on_select()

        label, markdown = presenter.documents[0]
        assert label == "Vendor 1"
        assert "# Categories:\n- Cloud\n" in markdown
        assert "vendorprofile/v1" in markdown

    async def test_presenter_failure_is_logged_not_raised(
        self, mock_client, taxonomy_cache, caplog
    ):
        presenter = Mock()
        presenter.show_menu = AsyncMock(side_effect=RuntimeError("host gone"))
        session = SearchSession(
            mock_client, presenter, "acme", taxonomy_cache=taxonomy_cache
        )
        mock_client.search.return_value = _page("acme", 1, remaining=0)

        assert await session.start() is True
        assert "host gone" in caplog.text

    async def test_same_inputs_give_identical_menus(
        self, mock_client, presenter, taxonomy_cache
    ):
        mock_client.search.side_effect = lambda *args: _page("acme", 3, remaining=5)
        dumps = []
        for _ in range(2):
            session = SearchSession(
                mock_client, presenter, "acme", taxonomy_cache=taxonomy_cache
            )
            await session.start()
            dumps.append({k: v.model_dump() for k, v in presenter.last_menu.items()})

        assert dumps[0] == dumps[1]


@pytest.mark.asyncio
class TestSearchbarListener:
    @pytest.fixture
    def listener(self, mock_client, presenter, taxonomy_cache):
        return SearchbarListener(
            mock_client, presenter, taxonomy_cache=taxonomy_cache, supersede=False
        )

    async def test_each_query_gets_its_own_session(
        self, listener, mock_client, presenter
    ):
        mock_client.search.side_effect = lambda query, size, cursor: _page(
            query, 2, remaining=4, cursor=cursor
        )

        tasks = [listener.on_query("acme"), listener.on_query("globex")]
        await asyncio.gather(*tasks)

        acme_menu = next(m for _, m in presenter.menus if "acme" in m["header1"].body)
        globex_menu = next(
            m for _, m in presenter.menus if "globex" in m["header1"].body
        )
        await acme_menu["next"].on_select()

        # Only the acme session moved; globex's menu still pages from cursor 0.
        await globex_menu["next"].on_select()
        cursors = {
            (c.args[0], c.args[2]) for c in mock_client.search.await_args_list
        }
        assert cursors == {("acme", 0), ("acme", 10), ("globex", 0), ("globex", 10)}

    async def test_upstream_error_drops_event(self, listener, mock_client):
        assert listener.on_query("acme", error=RuntimeError("searchbar")) is None
        mock_client.search.assert_not_called()

    async def test_blank_query_ignored(self, listener, mock_client):
        assert listener.on_query("   ") is None
        assert listener.on_query("") is None
        mock_client.search.assert_not_called()

    async def test_failure_does_not_affect_next_query(
        self, listener, mock_client, presenter
    ):
        mock_client.search.side_effect = [
            SearchFetchError("down"),
            _page("globex", 1, remaining=0),
        ]

        await listener.on_query("acme")
        await listener.on_query("globex")

        assert "No results for acme" in presenter.menus[0][1]["header1"].body
        assert presenter.menus[1][1]["header1"].body == "# Results for globex:"

    async def test_unexpected_error_is_contained(self, listener, mock_client, caplog):
        mock_client.search.side_effect = KeyError("surprise")

        task = listener.on_query("acme")
        await task

        assert task.exception() is None
        assert "Unexpected error while searching 'acme'" in caplog.text

    async def test_newer_query_supersedes_running_one(
        self, mock_client, presenter, taxonomy_cache
    ):
        release = asyncio.Event()

        async def slow_search(query, size, cursor):
            if query == "acme":
                await release.wait()
            return _page(query, 1, remaining=0)

        mock_client.search.side_effect = slow_search
        listener = SearchbarListener(
            mock_client, presenter, taxonomy_cache=taxonomy_cache, supersede=True
        )

        first = listener.on_query("acme")
        await asyncio.sleep(0)
        second = listener.on_query("globex")
        await second
        release.set()
        await asyncio.gather(first, return_exceptions=True)

        assert first.cancelled()
        assert [m["header1"].body for _, m in presenter.menus] == [
            "# Results for globex:"
        ]

    async def test_aclose_cancels_pending(self, listener, mock_client):
        async def never(*args):
            await asyncio.Event().wait()

        mock_client.search.side_effect = never
        task = listener.on_query("acme")
        await asyncio.sleep(0)

        await listener.aclose()

        assert task.cancelled()


def test_create_listener_from_config():
    config = VenddyConfig(page_size=5, taxonomy_cache_ttl=30, supersede_queries=False)

    listener = create_listener(config, Mock(spec=VenddyClient), FakePresenter())

    assert listener.page_size == 5
    assert listener.taxonomy_cache.ttl == 30
    assert listener.supersede is False
