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
Cursor arithmetic for paging through search results.
"""

from venddy_search.constants import DEFAULT_PAGE_SIZE
from venddy_search.data_models.pagination import PaginationState
from venddy_search.data_models.vendors import SearchResultPage
from venddy_search.exceptions import NavigationError


class PaginationController:
    """Computes the next and previous PaginationState of a session."""

    @staticmethod
    def initial(query_text: str, page_size: int = DEFAULT_PAGE_SIZE) -> PaginationState:
        return PaginationState(query_text=query_text, page_size=page_size, cursor=0)

    @staticmethod
    def can_advance(page: SearchResultPage) -> bool:
        return page.remaining_count > 0

    @staticmethod
    def can_retreat(state: PaginationState) -> bool:
        return state.cursor > 0

    @classmethod
    def advance(cls, state: PaginationState, page: SearchResultPage) -> PaginationState:
        """Moves one page forward. `page` is the page last fetched for state."""
        if not cls.can_advance(page):
            raise NavigationError(
                f"No results beyond cursor {state.cursor} for '{state.query_text}'"
            )
        return state.model_copy(update={"cursor": state.cursor + state.page_size})

    @classmethod
    def retreat(cls, state: PaginationState) -> PaginationState:
        if not cls.can_retreat(state):
            raise NavigationError(f"Already on the first page of '{state.query_text}'")
        cursor = max(0, state.cursor - state.page_size)
        return state.model_copy(update={"cursor": cursor})
