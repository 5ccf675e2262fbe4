"""
Declarative USPTO Data Set service.

    with create_client(ClientType.REQUESTS, config) as client:
        service = DataSetService(client)
        datasets = service.list_data_sets().body
        page = service.search(DEFAULT_DATASET, DEFAULT_VERSION, SearchRequest(rows=5)).body
"""

from __future__ import annotations

from typing import Optional

from staf.api import ApiResponse
from staf.clients import ApiService, get, post

from .models import DataSetList, FieldsResponse, SearchRequest, SearchResponse
from .request_path import GET_FIELDS, LIST_DATASETS, SEARCH_RECORDS


class DataSetService(ApiService):

    @get(LIST_DATASETS, response=DataSetList)
    def list_data_sets(self):
        """All available datasets."""

    @get(GET_FIELDS, response=FieldsResponse)
    def get_fields(self, dataset: str, version: str):
        """Searchable fields of a dataset."""

    @post(SEARCH_RECORDS, response=SearchResponse, form=("criteria", "start", "rows"))
    def search_records(
        self,
        dataset: str,
        version: str,
        criteria: Optional[str] = None,
        start: Optional[int] = None,
        rows: Optional[int] = None,
    ):
        """Search records; unset form fields are left to the server defaults."""

    def search(self, dataset: str, version: str, request: SearchRequest) -> ApiResponse:
        return self.search_records(
            dataset,
            version,
            criteria=request.criteria,
            start=request.start,
            rows=request.rows,
        )
