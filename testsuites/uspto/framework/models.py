"""
================================================================================
USPTO Data Set API Models
================================================================================

Wire fields are camelCase (apiKey, numFound); models expose snake_case
attributes and accept either spelling on input.

================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UsptoModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiInfo(UsptoModel):
    """One dataset entry of the dataset list."""
    api_key: Optional[str] = None
    api_version_number: Optional[str] = None
    api_url: Optional[str] = None
    api_documentation_url: Optional[str] = None


class DataSetList(UsptoModel):
    total: int
    apis: List[ApiInfo] = Field(default_factory=list)


class FieldsResponse(UsptoModel):
    dataset: Optional[str] = None
    version: Optional[str] = None
    fields: List[str] = Field(default_factory=list)


class SearchRequest(UsptoModel):
    """Form fields of POST /{dataset}/{version}/records."""
    criteria: str = "*:*"
    start: int = 0
    rows: int = 100


class SearchResponse(UsptoModel):
    num_found: int
    start: int = 0
    docs: List[Dict[str, Any]] = Field(default_factory=list)
