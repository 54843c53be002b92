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
Pydantic models for configuring the Venddy search client.
"""

from pydantic import BaseModel, Field, field_validator

from venddy_search.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SEARCH_URL,
    DEFAULT_TAXONOMY_BASE_URL,
)


class VenddyConfig(BaseModel):
    """Configuration for the Venddy data API and search sessions."""

    search_url: str = Field(
        default=DEFAULT_SEARCH_URL,
        description="Vendor search endpoint"
    )
    taxonomy_base_url: str = Field(
        default=DEFAULT_TAXONOMY_BASE_URL,
        description="Base URL of the taxonomy table endpoints"
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        gt=0,
        description="Number of vendors shown per page"
    )
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        gt=0,
        description="Client-wide HTTP timeout in seconds"
    )
    taxonomy_cache_ttl: float = Field(
        default=0,
        ge=0,
        description="Seconds to reuse a resolved taxonomy index (0 disables caching)"
    )
    supersede_queries: bool = Field(
        default=True,
        description="Cancel a still-running search when a newer query arrives"
    )

    @field_validator("taxonomy_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
