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
"""
Resolution of the taxonomy tables used to enrich search results.

Each table is fetched through one paginator and merged into an id to name
map. A failed or malformed page never aborts resolution: the failure is
logged and the table keeps whatever entries were merged before it.
"""

import asyncio
import logging
import time

from venddy_search.clients import VenddyClient
from venddy_search.constants import TAXONOMY_MAX_PAGES, TAXONOMY_PAGE_STRIDE
from venddy_search.data_models.taxonomy import TaxonomyIndex, TaxonomyTable
from venddy_search.exceptions import VenddyError

logger = logging.getLogger(__name__)

# Subcategory does not fit in one page of the API and is always read twice.
MIN_PAGES = {
    TaxonomyTable.CATEGORY: 1,
    TaxonomyTable.CLASS: 1,
    TaxonomyTable.SUBCATEGORY: 2,
    TaxonomyTable.TYPE: 1,
}


async def fetch_taxonomy_table(
    client: VenddyClient,
    table: TaxonomyTable,
    min_pages: int = 1,
    max_pages: int = TAXONOMY_MAX_PAGES,
) -> tuple[dict[str, str], bool]:
    """
    Fetches a taxonomy table page by page and merges it into an id to name map.

    The first page uses the endpoint's default cursor; later pages step the
    cursor by TAXONOMY_PAGE_STRIDE. Paging continues while fewer than
    min_pages have been read or the last page reported remaining entries,
    never beyond max_pages.

    Returns the merged map and whether every requested page was read.
    """
    names: dict[str, str] = {}
    complete = True
    cursor = None
    for page_number in range(max_pages):
        try:
            page = await client.fetch_taxonomy_page(table, cursor=cursor)
        except VenddyError as e:
            logger.error(
                "Failed to fetch %s taxonomy page at cursor %s: %s",
                table.value,
                cursor or 0,
                e,
            )
            complete = False
            break

        for entry in page.results:
            names[entry.id] = entry.name

        if page_number + 1 >= min_pages and page.remaining <= 0:
            break
        cursor = (cursor or 0) + TAXONOMY_PAGE_STRIDE
    else:
        logger.warning(
            "Stopped paging %s taxonomy after %d pages", table.value, max_pages
        )

    logger.debug("Resolved %d %s taxonomy entries", len(names), table.value)
    return names, complete


async def resolve_taxonomy(client: VenddyClient) -> TaxonomyIndex:
    """Fetches all four taxonomy tables concurrently."""
    tables = list(TaxonomyTable)
    results = await asyncio.gather(
        *[fetch_taxonomy_table(client, table, MIN_PAGES[table]) for table in tables]
    )
    return TaxonomyIndex.from_tables(
        {table: names for table, (names, _) in zip(tables, results, strict=True)},
        complete=all(complete for _, complete in results),
    )


class TaxonomyCache:
    """
    Reuses a resolved TaxonomyIndex for ttl seconds.

    A ttl of 0 disables caching and every call resolves the tables again.
    Concurrent callers share one in-flight resolution. An index with a failed
    table is returned but not kept, so the next call retries the tables.
    """

    def __init__(self, ttl: float = 0, clock=time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._index: TaxonomyIndex | None = None
        self._resolved_at = 0.0
        self._lock = asyncio.Lock()

    async def get(self, client: VenddyClient) -> TaxonomyIndex:
        if self.ttl <= 0:
            return await resolve_taxonomy(client)

        async with self._lock:
            if self._index is not None and self._clock() - self._resolved_at < self.ttl:
                return self._index

            index = await resolve_taxonomy(client)
            if index.complete:
                self._index = index
                self._resolved_at = self._clock()
            else:
                logger.info("Not caching incomplete taxonomy index")
                self._index = None
            return index

    def clear(self) -> None:
        self._index = None
