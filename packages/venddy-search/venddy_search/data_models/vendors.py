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
Pydantic models for the vendor search endpoint.

Field aliases match the JSON keys returned by the Venddy data API; the Python
attribute names are used everywhere else in the package.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VendorRecord(BaseModel):
    """A single vendor returned by a search, plus its enrichment fields."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", alias="_id")
    name: str = Field(default="", alias="Name")
    website: str = Field(default="", alias="Website")
    description: str = Field(default="", alias="Description")
    logo: str = Field(default="", alias="Logo")
    search_keywords: str = Field(default="", alias="Search field")
    score: float = Field(default=0.0, alias="Score")
    review_count: float = Field(default=0.0, alias="Number of Reviews")

    category_ids: list[str] = Field(default_factory=list, alias="Categories")
    class_ids: list[str] = Field(default_factory=list, alias="Classes")
    subcategory_ids: list[str] = Field(default_factory=list, alias="Subcategories")
    type_ids: list[str] = Field(default_factory=list, alias="Types")

    # Populated by enrichment.enrich_page
    category_names: str = ""
    class_names: str = ""
    subcategory_names: str = ""
    type_names: str = ""
    normalized_logo: str = ""

    @field_validator(
        "id", "name", "website", "description", "logo", "search_keywords",
        mode="before",
    )
    @classmethod
    def _none_to_empty_str(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("score", "review_count", mode="before")
    @classmethod
    def _none_to_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @field_validator(
        "category_ids", "class_ids", "subcategory_ids", "type_ids", mode="before"
    )
    @classmethod
    def _none_to_empty_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [item for item in v if item is not None]
        return v


class SearchResultPage(BaseModel):
    """One page of search results and the cursor that produced it."""

    model_config = ConfigDict(populate_by_name=True)

    query_text: str = ""
    results: list[VendorRecord] = Field(default_factory=list)
    cursor: int = Field(default=0, alias="Cursor")
    remaining_count: int = Field(default=0, alias="Remaining")
    count: int = Field(default=0, alias="Count")

    @field_validator("remaining_count", "cursor", "count", mode="before")
    @classmethod
    def _clamp_non_negative(cls, v: Any) -> Any:
        if v is None:
            return 0
        if isinstance(v, (int, float)) and v < 0:
            return 0
        return v

    @property
    def has_more(self) -> bool:
        return self.remaining_count > 0


class VendorSearchApiResponse(BaseModel):
    """The `{"response": {...}}` envelope wrapped around a search page."""

    response: SearchResultPage

    def to_page(self, query_text: str) -> SearchResultPage:
        return self.response.model_copy(update={"query_text": query_text})
