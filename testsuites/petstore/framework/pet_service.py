"""
Declarative Petstore service.

    with create_client(ClientType.REQUESTS, config) as client:
        service = PetService(client)
        created = service.create_pet(Pet(name="Buddy", tag="friendly")).body
        pets = service.get_pets(limit=10).body
"""

from __future__ import annotations

from typing import List, Optional

from staf.api import ApiResponse
from staf.clients import ApiService, get, post

from .models import Pet
from .request_path import CREATE_PET, GET_PET, LIST_PETS


class PetService(ApiService):

    @get(LIST_PETS, response=List[Pet], query=("limit",))
    def get_pets(self, limit: Optional[int] = None):
        """Pets, at most `limit` of them; no limit leaves paging to the server."""

    @post(CREATE_PET, response=Pet, body="pet")
    def create_pet(self, pet: Pet):
        """Create a pet and return it as stored."""

    @get(GET_PET, response=Pet)
    def get_pet_by_id(self, pet_id):
        """Single pet; `pet_id` is sent as given so malformed ids can be tried."""

    def get_all_pets(self) -> ApiResponse:
        return self.get_pets()
