"""USPTO Data Set API endpoint paths and defaults."""

BASE_URL = "https://developer.uspto.gov/ds-api"

LIST_DATASETS = "/"
GET_FIELDS = "/{dataset}/{version}/fields"
SEARCH_RECORDS = "/{dataset}/{version}/records"

DEFAULT_DATASET = "oa_citations"
DEFAULT_VERSION = "v1"
