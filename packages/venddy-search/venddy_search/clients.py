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
Client module for the Venddy data API.
Provides the vendor search request and the paged taxonomy table requests.
"""

import json
import logging

import httpx
from pydantic import BaseModel, ValidationError

from venddy_search.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SEARCH_URL,
    DEFAULT_TAXONOMY_BASE_URL,
    SEARCH_CONSTRAINT_TYPE,
    SEARCH_FIELD_KEY,
    SEARCH_SORT_FIELD,
)
from venddy_search.data_models.config import VenddyConfig
from venddy_search.data_models.taxonomy import (
    TaxonomyApiResponse,
    TaxonomyPage,
    TaxonomyTable,
)
from venddy_search.data_models.vendors import SearchResultPage, VendorSearchApiResponse
from venddy_search.exceptions import (
    FetchError,
    MalformedResponseError,
    SearchFetchError,
    TaxonomyFetchError,
)

logger = logging.getLogger(__name__)


def build_search_params(query_text: str, page_size: int, cursor: int) -> dict:
    """
    Builds the query parameters for a vendor search.

    The constraint is serialized with json.dumps so quotes, braces and
    backslashes in the user's text stay inside the JSON string value. httpx
    then URL-encodes every parameter.
    """
    constraints = [
        {
            "key": SEARCH_FIELD_KEY,
            "constraint_type": SEARCH_CONSTRAINT_TYPE,
            "value": query_text,
        }
    ]
    return {
        "constraints": json.dumps(constraints),
        "sort_field": SEARCH_SORT_FIELD,
        "descending": "true",
        "limit": page_size,
        "cursor": cursor,
    }


class VenddyClient:
    def __init__(
        self,
        search_url: str = DEFAULT_SEARCH_URL,
        taxonomy_base_url: str = DEFAULT_TAXONOMY_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the VenddyClient.

        Args:
            search_url: Vendor search endpoint
            taxonomy_base_url: Base URL for the taxonomy table endpoints
            timeout: Client-wide request timeout in seconds
            http_client: Optional preconfigured httpx client. When given, the
                caller owns it and aclose() leaves it open.
        """
        self.search_url = search_url
        self.taxonomy_base_url = taxonomy_base_url.rstrip("/")
        self.timeout = timeout
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "VenddyClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def search(
        self, query_text: str, page_size: int, cursor: int
    ) -> SearchResultPage:
        """
        Fetches one page of vendors whose search field contains query_text,
        best score first.

        Raises:
            SearchFetchError: On timeout, connection failure or non-2xx status.
            MalformedResponseError: If the body is not a valid search envelope.
        """
        params = build_search_params(query_text, page_size, cursor)
        response = await self._get(
            self.search_url, params, SearchFetchError, f"search '{query_text}'"
        )
        envelope = self._parse(response, VendorSearchApiResponse, "search")
        page = envelope.to_page(query_text)
        logger.info(
            "Search '%s' at cursor %d returned %d vendors, %d remaining",
            query_text,
            cursor,
            len(page.results),
            page.remaining_count,
        )
        return page

    async def fetch_taxonomy_page(
        self, table: TaxonomyTable, cursor: int | None = None
    ) -> TaxonomyPage:
        """
        Fetches one page of a taxonomy table. A cursor of None requests the
        endpoint's default first page.

        Raises:
            TaxonomyFetchError: On timeout, connection failure or non-2xx status.
            MalformedResponseError: If the body is not a valid taxonomy envelope.
        """
        url = f"{self.taxonomy_base_url}/{table.value}"
        params = {"cursor": cursor} if cursor is not None else None
        response = await self._get(
            url, params, TaxonomyFetchError, f"{table.value} taxonomy"
        )
        return self._parse(response, TaxonomyApiResponse, table.value).response

    async def _get(
        self,
        url: str,
        params: dict | None,
        error_cls: type[FetchError],
        what: str,
    ) -> httpx.Response:
        try:
            response = await self._http.get(url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise error_cls(f"Timed out fetching {what}: {e}", retryable=True) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise error_cls(
                f"Fetching {what} failed with status {status}",
                retryable=status >= 500,
            ) from e
        except httpx.RequestError as e:
            raise error_cls(
                f"Fetching {what} failed due to a network error: {e}", retryable=True
            ) from e
        return response

    @staticmethod
    def _parse(response: httpx.Response, model: type[BaseModel], what: str):
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Malformed {what} response: {e.error_count()} validation error(s)"
            ) from e


def create_client(config: VenddyConfig) -> VenddyClient:
    """
    Factory function to create a VenddyClient from configuration.

    Args:
        config: VenddyConfig holding endpoints and the request timeout
    """
    return VenddyClient(
        search_url=config.search_url,
        taxonomy_base_url=config.taxonomy_base_url,
        timeout=config.request_timeout,
    )
