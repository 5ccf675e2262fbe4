"""
================================================================================
USPTO Data Set Stub API
================================================================================

In-process stand-in for https://developer.uspto.gov/ds-api used for offline
runs. Serves a small fixed catalogue:

    - GET  /                              -> DataSetList
    - GET  /{dataset}/{version}/fields    -> FieldsResponse, 404 if unknown
    - POST /{dataset}/{version}/records   -> SearchResponse, 404 if unknown

Search criteria support "*:*" (everything) and "field:value" (exact match).

================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from staf.testing import StubApi, StubRequest, StubResponse

from .request_path import GET_FIELDS, LIST_DATASETS, SEARCH_RECORDS


PUBLIC_URL = "https://developer.uspto.gov/ds-api"
DOCS_URL = "https://developer.uspto.gov/ds-api-docs/index.html?url=https://developer.uspto.gov/ds-api/swagger/docs/{dataset}.json"

MATCH_ALL = "*:*"
DEFAULT_ROWS = 100


def _oa_citations(count: int) -> List[Dict[str, Any]]:
    return [
        {
            "id": f"oa-{index:04d}",
            "patentApplicationNumber": f"{14000000 + index}",
            "citedDocumentIdentifier": f"US{8000000 + index}B2",
            "groupArtUnitNumber": str(1600 + index % 5),
            "formPto892": "true" if index % 2 else "false",
        }
        for index in range(count)
    ]


def _cancer_moonshot(count: int) -> List[Dict[str, Any]]:
    return [
        {
            "id": f"cm-{index:04d}",
            "patentTitle": f"Oncology method {index}",
            "inventionSubjectMatterCategory": "Drugs" if index % 2 else "Diagnostics",
        }
        for index in range(count)
    ]


CATALOGUE: Dict[Tuple[str, str], List[Dict[str, Any]]] = {
    ("oa_citations", "v1"): _oa_citations(25),
    ("cancer_moonshot", "v1"): _cancer_moonshot(8),
}


def _not_found(dataset: str, version: str) -> StubResponse:
    return StubResponse(404, {"message": f"Dataset {dataset}/{version} not found"})


class UsptoStubApi(StubApi):

    base_path = "/ds-api"

    def __init__(self, catalogue: Optional[Dict[Tuple[str, str], List[Dict[str, Any]]]] = None) -> None:
        super().__init__()
        self.catalogue = catalogue if catalogue is not None else CATALOGUE
        self.add_route("GET", LIST_DATASETS, self._list_data_sets)
        self.add_route("GET", GET_FIELDS, self._get_fields)
        self.add_route("POST", SEARCH_RECORDS, self._search_records)

    def _records(self, request: StubRequest) -> Optional[List[Dict[str, Any]]]:
        key = (request.path_params["dataset"], request.path_params["version"])
        return self.catalogue.get(key)

    def _list_data_sets(self, request: StubRequest) -> StubResponse:
        apis = [
            {
                "apiKey": dataset,
                "apiVersionNumber": version,
                "apiUrl": f"{PUBLIC_URL}/{dataset}/{version}/fields",
                "apiDocumentationUrl": DOCS_URL.format(dataset=dataset),
            }
            for dataset, version in self.catalogue
        ]
        return StubResponse(200, {"total": len(apis), "apis": apis})

    def _get_fields(self, request: StubRequest) -> StubResponse:
        records = self._records(request)
        dataset, version = request.path_params["dataset"], request.path_params["version"]
        if records is None:
            return _not_found(dataset, version)
        fields = sorted({name for record in records for name in record})
        return StubResponse(200, {"dataset": dataset, "version": version, "fields": fields})

    def _search_records(self, request: StubRequest) -> StubResponse:
        records = self._records(request)
        if records is None:
            return _not_found(request.path_params["dataset"], request.path_params["version"])

        form = request.form()
        criteria = form.get("criteria") or MATCH_ALL
        try:
            start = int(form.get("start") or 0)
            rows = int(form.get("rows") or DEFAULT_ROWS)
        except ValueError:
            return StubResponse(400, {"message": "start and rows must be integers"})
        if start < 0 or rows < 0:
            return StubResponse(400, {"message": "start and rows cannot be negative"})

        if criteria == MATCH_ALL:
            matches = records
        elif ":" in criteria:
            name, _, value = criteria.partition(":")
            matches = [record for record in records if str(record.get(name)) == value]
        else:
            return StubResponse(400, {"message": f"Unsupported criteria: {criteria}"})

        return StubResponse(200, {
            "numFound": len(matches),
            "start": start,
            "docs": matches[start:start + rows],
        })
