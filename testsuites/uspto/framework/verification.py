"""
================================================================================
USPTO Response Verification
================================================================================

Domain checks on top of the generic ResponseVerificationService.

================================================================================
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from loguru import logger

from staf.verification import ResponseVerificationService, verify_that

from .models import ApiInfo, DataSetList


class UsptoVerificationService(ResponseVerificationService):
    """Response verification for the USPTO Data Set API."""

    def verify_data_set_list(self, data_set_list: Optional[DataSetList]) -> None:
        logger.info("Verifying DataSetList structure")
        verify_that(data_set_list is not None, "DataSetList is missing")
        verify_that(data_set_list.total > 0, f"Expected datasets, total is {data_set_list.total}")
        verify_that(data_set_list.apis, "APIs list is empty")
        verify_that(
            len(data_set_list.apis) == data_set_list.total,
            f"APIs list has {len(data_set_list.apis)} entries, total says {data_set_list.total}",
        )

    def verify_api_info(self, api_info: ApiInfo) -> None:
        logger.info(f"Verifying ApiInfo for dataset: {api_info.api_key}")
        verify_that(api_info.api_key, "API key is empty")
        verify_that(api_info.api_version_number, f"{api_info.api_key}: API version number is empty")
        for name in ("api_url", "api_documentation_url"):
            value = getattr(api_info, name)
            verify_that(
                value and value.startswith("https://"),
                f"{api_info.api_key}: {name} must be an https URL, got {value!r}",
            )

    def verify_fields_list(self, fields: Optional[Sequence[str]]) -> None:
        logger.info(f"Verifying fields list. Count: {len(fields) if fields else 0}")
        verify_that(fields, "Fields list is empty")
        empty = [index for index, name in enumerate(fields) if not name]
        verify_that(not empty, f"Empty field names at positions {empty}")

    def verify_search_response(self, search_response: Optional[Mapping[str, Any]]) -> None:
        """Raw search payload must carry numFound and docs."""
        logger.info("Verifying search response structure")
        verify_that(search_response, "Search response is empty")
        for key in ("numFound", "docs"):
            verify_that(key in search_response, f"Search response has no '{key}'")

    def verify_records_count(self, docs: Optional[List[Any]], expected_min_size: int) -> None:
        actual = len(docs) if docs is not None else 0
        logger.info(f"Verifying records count. Expected min: {expected_min_size}, Actual: {actual}")
        verify_that(docs is not None, "Documents list is missing")
        verify_that(
            actual >= expected_min_size,
            f"Expected at least {expected_min_size} records, got {actual}",
        )
