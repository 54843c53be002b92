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
Pagination state for one search session.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from venddy_search.constants import DEFAULT_PAGE_SIZE


class PaginationState(BaseModel):
    """Query text, page size and cursor of a single search session.

    States are immutable; navigation produces a new state.
    """

    model_config = ConfigDict(frozen=True)

    query_text: str
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    cursor: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_cursor_alignment(self) -> "PaginationState":
        if self.cursor % self.page_size != 0:
            raise ValueError(
                f"cursor {self.cursor} is not a multiple of page_size {self.page_size}"
            )
        return self
