"""Swagger Petstore (v1) endpoint paths and limits."""

BASE_URL = "http://petstore.swagger.io/v1"

LIST_PETS = "/pets"
CREATE_PET = "/pets"
GET_PET = "/pets/{pet_id}"

MAX_LIMIT = 100
