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
Pydantic models for the taxonomy reference tables.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaxonomyTable(str, Enum):
    """The four taxonomy tables. Values are the endpoint path segments."""

    CATEGORY = "category"
    CLASS = "class"
    SUBCATEGORY = "subcategory"
    TYPE = "solutionType"


class TaxonomyEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    name: str = Field(default="", alias="Name")

    @field_validator("name", mode="before")
    @classmethod
    def _none_to_empty_str(cls, v: Any) -> Any:
        return "" if v is None else v


class TaxonomyPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    results: list[TaxonomyEntry] = Field(default_factory=list)
    cursor: int = Field(default=0, alias="Cursor")
    remaining: int = Field(default=0, alias="Remaining")
    count: int = Field(default=0, alias="Count")

    @field_validator("cursor", "remaining", "count", mode="before")
    @classmethod
    def _none_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class TaxonomyApiResponse(BaseModel):
    response: TaxonomyPage


class TaxonomyIndex(BaseModel):
    """Id to name lookups for every taxonomy table.

    Ids are only meaningful within their own table; a category id is never
    looked up in the class table. complete is False when any table failed to
    load in full.
    """

    tables: dict[TaxonomyTable, dict[str, str]] = Field(
        default_factory=lambda: {table: {} for table in TaxonomyTable}
    )
    complete: bool = True

    def table(self, table: TaxonomyTable) -> dict[str, str]:
        return self.tables.get(table, {})

    def lookup(self, table: TaxonomyTable, entry_id: str) -> str | None:
        return self.table(table).get(entry_id)

    @classmethod
    def from_tables(
        cls, tables: dict[TaxonomyTable, dict[str, str]], complete: bool = True
    ) -> "TaxonomyIndex":
        merged = {table: dict(tables.get(table, {})) for table in TaxonomyTable}
        return cls(tables=merged, complete=complete)
