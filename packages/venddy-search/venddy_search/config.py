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
Configuration module for the Venddy search client.
"""

import os
from dotenv import load_dotenv
from pydantic import ValidationError

from .data_models.config import VenddyConfig

# Environment variable names
VENDDY_SEARCH_URL_ENV = "VENDDY_SEARCH_URL"
VENDDY_TAXONOMY_BASE_URL_ENV = "VENDDY_TAXONOMY_BASE_URL"
VENDDY_PAGE_SIZE_ENV = "VENDDY_PAGE_SIZE"
VENDDY_REQUEST_TIMEOUT_ENV = "VENDDY_REQUEST_TIMEOUT"
VENDDY_TAXONOMY_CACHE_TTL_ENV = "VENDDY_TAXONOMY_CACHE_TTL"
VENDDY_SUPERSEDE_QUERIES_ENV = "VENDDY_SUPERSEDE_QUERIES"

# Maps config fields to the environment variable that overrides them
_ENV_FIELDS = {
    "search_url": VENDDY_SEARCH_URL_ENV,
    "taxonomy_base_url": VENDDY_TAXONOMY_BASE_URL_ENV,
    "page_size": VENDDY_PAGE_SIZE_ENV,
    "request_timeout": VENDDY_REQUEST_TIMEOUT_ENV,
    "taxonomy_cache_ttl": VENDDY_TAXONOMY_CACHE_TTL_ENV,
    "supersede_queries": VENDDY_SUPERSEDE_QUERIES_ENV,
}


def _load_env_file() -> None:
    """Load .env file if present in the current directory."""
    load_dotenv()


def get_venddy_config() -> VenddyConfig:
    """
    Get Venddy search configuration from environment variables.

    Only variables that are set (and non-blank) override the defaults on
    VenddyConfig.

    Returns:
        VenddyConfig object containing the configuration

    Raises:
        ValueError: If a variable holds a value that fails validation
    """
    # Load .env file if present
    _load_env_file()

    config_data = {}
    for field_name, env_name in _ENV_FIELDS.items():
        value = os.getenv(env_name)
        if value and value.strip():
            config_data[field_name] = value.strip()

    try:
        return VenddyConfig.model_validate(config_data)
    except ValidationError as e:
        bad_fields = [str(err["loc"][0]) for err in e.errors() if err["loc"]]
        bad_envs = ", ".join(_ENV_FIELDS[f] for f in bad_fields if f in _ENV_FIELDS)
        raise ValueError(f"Invalid configuration in {bad_envs}: {e}") from e
