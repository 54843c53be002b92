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
Endpoints and fixed values shared across the Venddy search pipeline.
"""

DEFAULT_SEARCH_URL = "https://venddy.com/api/1.1/obj/vendor"
DEFAULT_TAXONOMY_BASE_URL = "https://venddy.com/api/1.1/obj"
DEFAULT_PAGE_SIZE = 10
DEFAULT_REQUEST_TIMEOUT = 10.0

# Search request constraint
SEARCH_FIELD_KEY = "searchfield"
SEARCH_CONSTRAINT_TYPE = "text contains"
SEARCH_SORT_FIELD = "Score"

# The taxonomy endpoints page in blocks of 100 entries.
TAXONOMY_PAGE_STRIDE = 100
TAXONOMY_MAX_PAGES = 10

MENU_LABEL = "Venddy Search"
VENDDY_SEARCH_PAGE_URL = "https://venddy.com/searchvendor"
VENDDY_PROFILE_URL = "https://venddy.com/vendorprofile/{vendor_id}"

LOGO_PROXY_BASE = "https://d1muf25xaso8hp.cloudfront.net/http:"
PLACEHOLDER_LOGO_URL = (
    "https://d1muf25xaso8hp.cloudfront.net/"
    "https%3A%2F%2Fs3.amazonaws.com%2Fappforest_uf%2Ff1531944633470x300479865865781900"
    "%2FDefault%2520Logo.png?w=256&h=256&auto=compress&dpr=1&fit=max"
)
