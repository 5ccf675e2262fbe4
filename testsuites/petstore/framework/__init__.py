"""
================================================================================
Swagger Petstore API Test Framework
================================================================================

Modules:
    - request_path: Endpoint paths and the page-size limit
    - service_config: Base URL from configuration
    - models: Pet and Error pydantic models
    - pet_service: Declarative PetService
    - pet_data_factory: Pet payload generation
    - verification: Pet response checks
    - stub_api: In-memory pet store for offline runs

Author: Automation Team
License: MIT
================================================================================
"""

from .models import Error, Pet
from .pet_data_factory import PetDataFactory
from .pet_service import PetService
from .service_config import PetstoreConfig
from .stub_api import PetstoreStubApi
from .verification import PetVerificationService

__all__ = [
    "Error",
    "Pet",
    "PetDataFactory",
    "PetService",
    "PetVerificationService",
    "PetstoreConfig",
    "PetstoreStubApi",
]
