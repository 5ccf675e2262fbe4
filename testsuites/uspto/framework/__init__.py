"""
================================================================================
USPTO Data Set API Test Framework
================================================================================

Modules:
    - request_path: Endpoint paths and default dataset/version
    - service_config: Base URL and defaults from configuration
    - models: camelCase-aliased pydantic models
    - dataset_service: Declarative DataSetService
    - verification: Domain response checks
    - stub_api: In-process catalogue for offline runs

Author: Automation Team
License: MIT
================================================================================
"""

from .dataset_service import DataSetService
from .models import ApiInfo, DataSetList, FieldsResponse, SearchRequest, SearchResponse
from .service_config import UsptoConfig
from .stub_api import UsptoStubApi
from .verification import UsptoVerificationService

__all__ = [
    "ApiInfo",
    "DataSetList",
    "DataSetService",
    "FieldsResponse",
    "SearchRequest",
    "SearchResponse",
    "UsptoConfig",
    "UsptoStubApi",
    "UsptoVerificationService",
]
