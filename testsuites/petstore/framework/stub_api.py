"""
================================================================================
Petstore Stub API
================================================================================

In-process stand-in for http://petstore.swagger.io/v1 used for offline runs.
Keeps pets in memory for the lifetime of the stub:

    - GET  /pets?limit=N      -> list of pets, at most N (0..100), 400 otherwise
    - POST /pets              -> 201 with the stored pet; 400 without a name,
                                 409 for an id already in use
    - GET  /pets/{petId}      -> the pet, 400 for a non-numeric id, 404 if unknown

Errors use the API's Error shape: {"code": 404, "message": "..."}.

================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from staf.testing import StubApi, StubRequest, StubResponse

from .request_path import CREATE_PET, GET_PET, LIST_PETS, MAX_LIMIT


SEED_PETS = [
    {"id": 1, "name": "Buddy", "tag": "friendly"},
    {"id": 2, "name": "Luna", "tag": "playful"},
    {"id": 3, "name": "Max"},
]


def _error(code: int, message: str) -> StubResponse:
    return StubResponse(code, {"code": code, "message": message})


class PetstoreStubApi(StubApi):

    base_path = "/v1"

    def __init__(self, pets: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        super().__init__()
        self.pets: Dict[int, Dict[str, Any]] = {}
        for pet in SEED_PETS if pets is None else pets:
            self.pets[pet["id"]] = dict(pet)
        self.add_route("GET", LIST_PETS, self._list_pets)
        self.add_route("POST", CREATE_PET, self._create_pet)
        self.add_route("GET", GET_PET, self._get_pet)

    def _next_id(self) -> int:
        return max(self.pets, default=0) + 1

    def _list_pets(self, request: StubRequest) -> StubResponse:
        raw_limit = request.query.get("limit")
        limit = MAX_LIMIT
        if raw_limit is not None:
            try:
                limit = int(raw_limit)
            except ValueError:
                return _error(400, f"limit must be an integer, got {raw_limit!r}")
            if not 0 <= limit <= MAX_LIMIT:
                return _error(400, f"limit must be between 0 and {MAX_LIMIT}")
        return StubResponse(200, list(self.pets.values())[:limit])

    def _create_pet(self, request: StubRequest) -> StubResponse:
        try:
            payload = request.json()
        except ValueError:
            return _error(400, "Request body must be JSON")
        if not isinstance(payload, dict):
            return _error(400, "Request body must be a pet object")

        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            return _error(400, "name is required")

        pet_id = payload.get("id")
        if pet_id is None:
            pet_id = self._next_id()
        elif not isinstance(pet_id, int) or isinstance(pet_id, bool) or pet_id < 0:
            return _error(400, f"id must be a non-negative integer, got {pet_id!r}")
        if pet_id in self.pets:
            return _error(409, f"Pet {pet_id} already exists")

        pet = {"id": pet_id, "name": name}
        if payload.get("tag") is not None:
            pet["tag"] = payload["tag"]
        self.pets[pet_id] = pet
        return StubResponse(201, pet)

    def _get_pet(self, request: StubRequest) -> StubResponse:
        raw_id = request.path_params["pet_id"]
        try:
            pet_id = int(raw_id)
        except ValueError:
            return _error(400, f"Invalid pet id: {raw_id!r}")
        pet = self.pets.get(pet_id)
        if pet is None:
            return _error(404, f"Pet {pet_id} not found")
        return StubResponse(200, pet)
