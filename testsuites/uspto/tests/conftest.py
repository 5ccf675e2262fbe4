"""
================================================================================
USPTO Pytest Configuration
================================================================================

Fixtures:
    - uspto_config: Base URL and default dataset/version
    - uspto_stub: In-process catalogue (None with --run-external)
    - _clear_received: Empties the stub's request log before each test
    - httpx_client: httpx backend, JSON mapping
    - dataset_service: Declarative DataSetService on the requests backend
    - verification: UsptoVerificationService

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

from ..framework import DataSetService, UsptoConfig, UsptoStubApi, UsptoVerificationService


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "uspto" in str(item.fspath):
            item.add_marker(pytest.mark.api)


@pytest.fixture(scope="session")
def uspto_config() -> UsptoConfig:
    config = UsptoConfig.load()
    logger.info(f"USPTO base URL: {config.base_url}")
    return config


@pytest.fixture(scope="session")
def verification() -> UsptoVerificationService:
    return UsptoVerificationService()


@pytest.fixture(scope="session")
def uspto_stub(run_external: bool) -> Optional[UsptoStubApi]:
    """The catalogue is read-only, one stub serves the whole session."""
    return None if run_external else UsptoStubApi()


@pytest.fixture(autouse=True)
def _clear_received(uspto_stub: Optional[UsptoStubApi]) -> None:
    """Recorded requests belong to the current test only."""
    if uspto_stub is not None:
        uspto_stub.reset_received()


def _client_config(uspto_config: UsptoConfig, mapping: ObjectMappingType) -> ApiClientConfig:
    return ApiClientConfig.from_loader(base_url=uspto_config.base_url, object_mapping_type=mapping)


@pytest.fixture
def httpx_client(uspto_config, uspto_stub) -> Generator[BaseApiClient, None, None]:
    config = _client_config(uspto_config, ObjectMappingType.JSON)
    with create_client(ClientType.HTTPX, config, stub=uspto_stub) as client:
        yield client


@pytest.fixture
def dataset_service(uspto_config, uspto_stub) -> Generator[DataSetService, None, None]:
    config = _client_config(uspto_config, ObjectMappingType.PYDANTIC)
    with create_client(ClientType.REQUESTS, config, stub=uspto_stub) as client:
        yield DataSetService(client)
