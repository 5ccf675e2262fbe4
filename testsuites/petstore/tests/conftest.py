"""
================================================================================
Petstore Pytest Configuration
================================================================================

Fixtures:
    - petstore_config: Base URL
    - pet_stub: Fresh in-memory store per test (None with --run-external)
    - httpx_client: httpx backend, JSON mapping
    - pet_service: Declarative PetService on the requests backend, pydantic mapping
    - pet_factory: PetDataFactory
    - verification: PetVerificationService

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

from ..framework import (
    PetDataFactory,
    PetService,
    PetstoreConfig,
    PetstoreStubApi,
    PetVerificationService,
)


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "petstore" in str(item.fspath):
            item.add_marker(pytest.mark.api)


@pytest.fixture(scope="session")
def petstore_config() -> PetstoreConfig:
    config = PetstoreConfig.load()
    logger.info(f"Petstore base URL: {config.base_url}")
    return config


@pytest.fixture(scope="session")
def verification() -> PetVerificationService:
    return PetVerificationService()


@pytest.fixture
def pet_stub(run_external: bool) -> Optional[PetstoreStubApi]:
    """Created pets stay in the store, so every test gets its own."""
    return None if run_external else PetstoreStubApi()


@pytest.fixture
def pet_factory() -> PetDataFactory:
    return PetDataFactory()


def _client_config(petstore_config: PetstoreConfig, mapping: ObjectMappingType) -> ApiClientConfig:
    return ApiClientConfig.from_loader(base_url=petstore_config.base_url, object_mapping_type=mapping)


@pytest.fixture
def httpx_client(petstore_config, pet_stub) -> Generator[BaseApiClient, None, None]:
    config = _client_config(petstore_config, ObjectMappingType.JSON)
    with create_client(ClientType.HTTPX, config, stub=pet_stub) as client:
        yield client


@pytest.fixture
def pet_service(petstore_config, pet_stub) -> Generator[PetService, None, None]:
    config = _client_config(petstore_config, ObjectMappingType.PYDANTIC)
    with create_client(ClientType.REQUESTS, config, stub=pet_stub) as client:
        yield PetService(client)
