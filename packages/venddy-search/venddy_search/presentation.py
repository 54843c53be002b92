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
Builds the menu and detail views shown to the user for a page of results.

Menu element order keys, for a page of N vendors:
    0        results header
    1..N     one option per vendor
    N+2      remaining results header
    N+3      "next" option (only when more results remain)
    N+4      "prev" option (only past the first page)
    N+5      link to the full search on venddy.com
"""

from collections.abc import Awaitable, Callable
from functools import partial
from urllib.parse import quote_plus

from venddy_search.constants import VENDDY_PROFILE_URL, VENDDY_SEARCH_PAGE_URL
from venddy_search.data_models.pagination import PaginationState
from venddy_search.data_models.presentation import (
    DetailDocument,
    ListElement,
    ListLink,
    ListMessage,
    ListPair,
    MenuElement,
    OptionElement,
    SelectCallback,
    TextElement,
)
from venddy_search.data_models.vendors import SearchResultPage, VendorRecord
from venddy_search.pagination import PaginationController


def vendor_label(record: VendorRecord) -> str:
    return (
        f"{record.name} ~ Rating:{record.score:.0f}"
        f" ~ Reviews:{record.review_count:.0f}"
    )


def search_page_url(query_text: str) -> str:
    return f"{VENDDY_SEARCH_PAGE_URL}?keyword={quote_plus(query_text)}"


def build_no_results(query_text: str) -> dict[str, MenuElement]:
    return {
        "header1": TextElement(
            body=f"# No results for {query_text}, please try another search",
            order=0,
        )
    }


def build_menu(
    page: SearchResultPage,
    state: PaginationState,
    on_select: Callable[[VendorRecord], Awaitable[None]] | None = None,
    on_next: SelectCallback | None = None,
    on_previous: SelectCallback | None = None,
) -> dict[str, MenuElement]:
    """
    Converts an enriched result page into an ordered map of menu elements.

    Each vendor option is bound to its own record, so choosing it calls
    on_select(record) for that vendor.
    """
    if not page.results:
        return build_no_results(state.query_text)

    elements: dict[str, MenuElement] = {
        "header1": TextElement(body=f"# Results for {state.query_text}:", order=0)
    }
    for i, record in enumerate(page.results):
        elements[str(i)] = OptionElement(
            label=vendor_label(record),
            order=i + 1,
            on_select=partial(on_select, record) if on_select else None,
        )

    n = len(page.results)
    elements["header2"] = TextElement(
        body=f"# Remaining Results: {page.remaining_count}", order=n + 2
    )
    if PaginationController.can_advance(page):
        elements["next"] = OptionElement(
            label=f"next {state.page_size} results",
            order=n + 3,
            on_select=on_next,
        )
    if PaginationController.can_retreat(state):
        elements["prev"] = OptionElement(
            label=f"prev {state.page_size} results",
            order=n + 4,
            on_select=on_previous,
        )
    elements["viewOnVenddy"] = TextElement(
        body=search_page_url(state.query_text), order=n + 5
    )
    return elements


def build_detail(record: VendorRecord) -> DetailDocument:
    """Renders one enriched vendor as a markdown document."""
    profile_url = VENDDY_PROFILE_URL.format(vendor_id=record.id)
    markdown = (
        f"[![Logo not found]({record.normalized_logo})]({record.website}) "
        f"\n_{record.description}_\n"
        f"\n# Classes:\n{record.class_names}"
        f"\n# Types:\n{record.type_names}"
        f"\n# Categories:\n{record.category_names}"
        f"\n# Subcategories:\n{record.subcategory_names}"
        f"\n\n [View on Venddy]({profile_url})"
    )
    return DetailDocument(label=record.name, markdown=markdown)


def build_detail_elements(record: VendorRecord) -> dict[str, ListElement]:
    """Renders one vendor as a keyed list of link, rating, reviews and summary."""
    return {
        f"{record.id}_website": ListLink(
            href=record.website, text=record.website, order=0
        ),
        f"{record.id}_rating": ListPair(
            label="Rating", value=f"{record.score:g}", order=1
        ),
        f"{record.id}_reviews": ListPair(
            label="Reviews", value=f"{record.review_count:g}", order=2
        ),
        f"{record.id}_description": ListMessage(
            header=record.description, body=record.search_keywords, order=3
        ),
    }
