"""
================================================================================
Tic-Tac-Toe Pytest Configuration
================================================================================

Shared fixtures for the tic-tac-toe suite.

Fixtures:
    - service_config: Base URL and credentials
    - stub_api: Fresh in-process game per test (None with --run-external)
    - httpx_client: httpx backend with JSON object mapping
    - requests_client: requests backend with pydantic object mapping
    - board_service: Declarative BoardService on the httpx backend
    - rvs: Response verification service

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Generator, Optional

import pytest
from loguru import logger

from staf.api import ApiClientConfig, BaseApiClient, ObjectMappingType
from staf.clients import ClientType, create_client
from staf.verification import ResponseVerificationService

from ..framework import BoardService, ServiceConfig, TicTacToeStubApi, bearer_auth_headers


def pytest_collection_modifyitems(config, items):
    """Tag every test of this suite with the api marker."""
    for item in items:
        if "tictactoe" in str(item.fspath):
            item.add_marker(pytest.mark.api)


# =============================================================================
# Session-Scoped Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def service_config() -> ServiceConfig:
    config = ServiceConfig.load()
    logger.info(f"Initializing tic-tac-toe suite with base URL: {config.base_url}")
    return config


@pytest.fixture(scope="session")
def rvs() -> ResponseVerificationService:
    return ResponseVerificationService()


# =============================================================================
# Function-Scoped Fixtures
# =============================================================================

@pytest.fixture
def stub_api(run_external: bool) -> Optional[TicTacToeStubApi]:
    """Fresh game for every test; live runs share the server's state."""
    if run_external:
        return None
    return TicTacToeStubApi()


def _client(
    client_type: ClientType,
    mapping: ObjectMappingType,
    service_config: ServiceConfig,
    stub_api: Optional[TicTacToeStubApi],
) -> BaseApiClient:
    config = ApiClientConfig.from_loader(
        base_url=service_config.base_url,
        object_mapping_type=mapping,
    )
    return create_client(client_type, config, stub=stub_api)


@pytest.fixture
def httpx_client(service_config, stub_api) -> Generator[BaseApiClient, None, None]:
    with _client(ClientType.HTTPX, ObjectMappingType.JSON, service_config, stub_api) as client:
        yield client


@pytest.fixture
def requests_client(service_config, stub_api) -> Generator[BaseApiClient, None, None]:
    with _client(ClientType.REQUESTS, ObjectMappingType.PYDANTIC, service_config, stub_api) as client:
        yield client


@pytest.fixture
def board_service(httpx_client: BaseApiClient, service_config: ServiceConfig) -> BoardService:
    return BoardService(httpx_client, default_headers=bearer_auth_headers(service_config))
