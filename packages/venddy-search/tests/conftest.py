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
Global pytest configuration and fixtures.

Pytest automatically discovers and loads this file. Fixtures defined here are
available to all tests in this directory and its subdirectories without
needing to import them explicitly.
"""

import os
from collections.abc import Callable
from unittest.mock import patch

import httpx
import pytest
from venddy_search.clients import VenddyClient


@pytest.fixture(autouse=True)
def clean_env():
    """
    Automatically clear environment variables for all tests to ensure
    tests are hermetic and don't depend on the host environment.
    """
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture(autouse=True)
def mock_load_dotenv():
    """
    Automatically mock load_dotenv for all tests to prevent
    loading environment variables from local .env files.
    """
    with patch("venddy_search.config.load_dotenv"):
        yield


@pytest.fixture
def make_client():
    """
    Builds a VenddyClient whose HTTP traffic goes to `handler` instead of the
    network. Requests seen by the handler are recorded on `client.requests`.
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> VenddyClient:
        requests = []

        def _recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(_recording_handler))
        client = VenddyClient(
            search_url="https://api.test/vendor",
            taxonomy_base_url="https://api.test/obj",
            http_client=http,
        )
        client.requests = requests
        return client

    return _make
