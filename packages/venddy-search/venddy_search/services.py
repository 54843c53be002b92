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
import logging
from typing import Protocol

from venddy_search.clients import VenddyClient
from venddy_search.constants import DEFAULT_PAGE_SIZE, MENU_LABEL
from venddy_search.data_models.config import VenddyConfig
from venddy_search.data_models.pagination import PaginationState
from venddy_search.data_models.presentation import MenuElement
from venddy_search.data_models.vendors import SearchResultPage, VendorRecord
from venddy_search.enrichment import enrich_page
from venddy_search.exceptions import NavigationError, VenddyError
from venddy_search.pagination import PaginationController
from venddy_search.presentation import build_detail, build_menu, build_no_results
from venddy_search.taxonomy import TaxonomyCache

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    """The host UI that displays menus and documents."""

    async def show_menu(self, label: str, elements: dict[str, MenuElement]) -> None:
        ...

    async def show_document(self, label: str, markdown: str) -> None:
        ...


class SearchSession:
    """
    The fetch, enrich and render pipeline for a single query.

    A session owns its PaginationState; navigation callbacks on the menus it
    renders move only this session's cursor.
    """

    def __init__(
        self,
        client: VenddyClient,
        presenter: Presenter,
        query_text: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        taxonomy_cache: TaxonomyCache | None = None,
        label: str = MENU_LABEL,
    ) -> None:
        self.client = client
        self.presenter = presenter
        self.label = label
        self.state = PaginationController.initial(query_text, page_size)
        self.page: SearchResultPage | None = None
        self._taxonomy = taxonomy_cache or TaxonomyCache()
        self._lock = asyncio.Lock()

    async def fetch_page(self, state: PaginationState) -> SearchResultPage:
        """Searches at state's cursor and enriches the page with taxonomy names."""
        page = await self.client.search(state.query_text, state.page_size, state.cursor)
        if not page.results:
            return page
        index = await self._taxonomy.get(self.client)
        return enrich_page(page, index)

    async def start(self) -> bool:
        """Renders the first page. A failed search shows the no-results menu."""
        async with self._lock:
            elements = await self._load(self.state)
        if elements is None:
            await self._show_menu(build_no_results(self.state.query_text))
            return False
        await self._show_menu(elements)
        return True

    async def next_page(self) -> bool:
        async with self._lock:
            if self.page is None:
                logger.warning("No page rendered yet for '%s'", self.state.query_text)
                return False
            try:
                state = PaginationController.advance(self.state, self.page)
            except NavigationError as e:
                logger.warning("Ignoring next page request: %s", e)
                return False
            elements = await self._load(state)
        return await self._show_loaded(elements)

    async def previous_page(self) -> bool:
        async with self._lock:
            try:
                state = PaginationController.retreat(self.state)
            except NavigationError as e:
                logger.warning("Ignoring previous page request: %s", e)
                return False
            elements = await self._load(state)
        return await self._show_loaded(elements)

    async def show_detail(self, record: VendorRecord) -> None:
        document = build_detail(record)
        try:
            await self.presenter.show_document(document.label, document.markdown)
        except Exception as e:  # noqa: BLE001
            logger.error("Failed to show details for '%s': %s", record.name, e)

    async def _load(self, state: PaginationState) -> dict[str, MenuElement] | None:
        """
        Fetches the page for state and moves the session onto it, returning the
        menu to show. On failure the session keeps its previous state and None
        is returned.

        Callers hold the session lock; the menu is shown after releasing it so
        a presenter may navigate from inside show_menu.
        """
        try:
            page = await self.fetch_page(state)
        except VenddyError as e:
            logger.error(
                "Search for '%s' at cursor %d failed: %s",
                state.query_text,
                state.cursor,
                e,
            )
            return None

        self.state, self.page = state, page
        return build_menu(
            page,
            state,
            on_select=self.show_detail,
            on_next=self.next_page,
            on_previous=self.previous_page,
        )

    async def _show_loaded(self, elements: dict[str, MenuElement] | None) -> bool:
        if elements is None:
            return False
        await self._show_menu(elements)
        return True

    async def _show_menu(self, elements: dict[str, MenuElement]) -> None:
        try:
            await self.presenter.show_menu(self.label, elements)
        except Exception as e:  # noqa: BLE001
            logger.error("Failed to show menu for '%s': %s", self.state.query_text, e)


class SearchbarListener:
    """
    Receives submitted query text and runs a fresh SearchSession per query as
    its own asyncio task, so the caller is never blocked by a search.
    """

    def __init__(
        self,
        client: VenddyClient,
        presenter: Presenter,
        page_size: int = DEFAULT_PAGE_SIZE,
        taxonomy_cache: TaxonomyCache | None = None,
        supersede: bool = True,
    ) -> None:
        self.client = client
        self.presenter = presenter
        self.page_size = page_size
        self.taxonomy_cache = taxonomy_cache or TaxonomyCache()
        self.supersede = supersede
        self._tasks: set[asyncio.Task] = set()
        self._latest: asyncio.Task | None = None

    def on_query(
        self, text: str, error: Exception | None = None
    ) -> asyncio.Task | None:
        """
        Starts a search for text. Must be called from a running event loop.

        Returns the scheduled task, or None when the event was dropped.
        """
        if error is not None:
            logger.error("Received error from searchbar: %s", error)
            return None
        if not text or not text.strip():
            return None

        if self.supersede and self._latest is not None and not self._latest.done():
            logger.info("Cancelling superseded search")
            self._latest.cancel()

        session = SearchSession(
            self.client,
            self.presenter,
            text,
            page_size=self.page_size,
            taxonomy_cache=self.taxonomy_cache,
        )
        task = asyncio.create_task(self._run(session))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._latest = task
        return task

    async def _run(self, session: SearchSession) -> None:
        try:
            await session.start()
        except asyncio.CancelledError:
            logger.info("Search for '%s' was superseded", session.state.query_text)
            raise
        except Exception:
            logger.exception(
                "Unexpected error while searching '%s'", session.state.query_text
            )

    async def aclose(self) -> None:
        """Cancels and waits for all in-flight searches."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


def create_listener(
    config: VenddyConfig, client: VenddyClient, presenter: Presenter
) -> SearchbarListener:
    """Factory function to create a SearchbarListener from configuration."""
    return SearchbarListener(
        client,
        presenter,
        page_size=config.page_size,
        taxonomy_cache=TaxonomyCache(ttl=config.taxonomy_cache_ttl),
        supersede=config.supersede_queries,
    )
