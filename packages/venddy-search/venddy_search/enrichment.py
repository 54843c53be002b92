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
Joins the taxonomy id-lists on each vendor against a TaxonomyIndex.
"""

from venddy_search.constants import LOGO_PROXY_BASE, PLACEHOLDER_LOGO_URL
from venddy_search.data_models.taxonomy import TaxonomyIndex, TaxonomyTable
from venddy_search.data_models.vendors import SearchResultPage, VendorRecord

# (id-list attribute, display attribute, table)
_JOIN_FIELDS = (
    ("category_ids", "category_names", TaxonomyTable.CATEGORY),
    ("class_ids", "class_names", TaxonomyTable.CLASS),
    ("subcategory_ids", "subcategory_names", TaxonomyTable.SUBCATEGORY),
    ("type_ids", "type_names", TaxonomyTable.TYPE),
)


def join_names(table: dict[str, str], ids: list[str]) -> str:
    """
    Renders the names of ids as a bulleted list, one "- name" line per id.

    Order and repeats follow ids; ids missing from table are skipped.
    """
    return "".join(f"- {table[i]}\n" for i in ids if i in table)


def normalize_logo(logo: str) -> str:
    """Returns a logo URL that is always absolute."""
    if not logo:
        return PLACEHOLDER_LOGO_URL
    if logo.lower().startswith(("http://", "https://")):
        return logo
    return f"{LOGO_PROXY_BASE}{logo}"


def enrich_record(record: VendorRecord, index: TaxonomyIndex) -> VendorRecord:
    for ids_attr, names_attr, table in _JOIN_FIELDS:
        names = join_names(index.table(table), getattr(record, ids_attr))
        setattr(record, names_attr, names)
    record.normalized_logo = normalize_logo(record.logo)
    return record


def enrich_page(page: SearchResultPage, index: TaxonomyIndex) -> SearchResultPage:
    """Fills the display fields of every record on the page in place."""
    for record in page.results:
        enrich_record(record, index)
    return page
