"""
================================================================================
Pet Data Factory
================================================================================

Generates pets for the Petstore suite: valid ones, pets missing a field on
purpose, and hostile name/id strings for input-validation tests.

Features:
- Reproducible data with a seed
- Distinct ids for batches of pets

Usage:
    factory = PetDataFactory(seed=7)
    pet = factory.valid_pet()
    nameless = factory.pet_without_name()

================================================================================
"""

from __future__ import annotations

import random
import string
from typing import List, Optional

from .models import Pet
from .request_path import MAX_LIMIT


PET_NAMES = [
    "Buddy", "Max", "Charlie", "Cooper", "Rocky", "Bear", "Duke", "Zeus",
    "Luna", "Bella", "Daisy", "Lucy", "Sadie", "Molly", "Maggie", "Bailey",
]
PET_TAGS = ["friendly", "playful", "energetic", "calm", "trained", "young", "adult", "senior"]

# Generated ids stay clear of the stub's seed pets
MIN_PET_ID = 1000
MAX_PET_ID = 2**63 - 1
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;':\",./<>?"
SQL_INJECTION = "'; DROP TABLE pets;--"
XSS_PAYLOAD = "<script>alert('XSS')</script>"


class PetDataFactory:
    """Factory of Pet payloads."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    # ------------------------------------------------------------------
    # Field generators
    # ------------------------------------------------------------------

    def pet_id(self) -> int:
        return self._random.randint(MIN_PET_ID, 999_999)

    def pet_name(self) -> str:
        return self._random.choice(PET_NAMES)

    def pet_tag(self) -> str:
        return self._random.choice(PET_TAGS)

    def long_string(self, length: int = 256) -> str:
        chars = string.ascii_lowercase + string.digits
        return "".join(self._random.choice(chars) for _ in range(length))

    def limit(self, maximum: int = MAX_LIMIT) -> int:
        """Random valid page size, 1..maximum."""
        return self._random.randint(1, maximum)

    # ------------------------------------------------------------------
    # Pets
    # ------------------------------------------------------------------

    def valid_pet(self) -> Pet:
        return Pet(id=self.pet_id(), name=self.pet_name(), tag=self.pet_tag())

    def minimal_pet(self) -> Pet:
        """Pet with id and name only."""
        return Pet(id=self.pet_id(), name=self.pet_name())

    def pet_with_id(self, pet_id: int) -> Pet:
        return Pet(id=pet_id, name=self.pet_name(), tag=self.pet_tag())

    def pet_with_name(self, name: str) -> Pet:
        return Pet(id=self.pet_id(), name=name, tag=self.pet_tag())

    def pet_without_id(self) -> Pet:
        return Pet(name=self.pet_name(), tag=self.pet_tag())

    def pet_without_name(self) -> Pet:
        return Pet(id=self.pet_id(), tag=self.pet_tag())

    def multiple_pets(self, count: int) -> List[Pet]:
        """`count` valid pets with distinct ids."""
        ids = self._random.sample(range(MIN_PET_ID, 1_000_000), count)
        return [self.pet_with_id(pet_id) for pet_id in ids]
