"""
================================================================================
Petstore Response Verification
================================================================================

Pet-specific checks on top of the generic ResponseVerificationService.

================================================================================
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

import allure
from loguru import logger

from staf.api import ApiResponse
from staf.verification import ResponseVerificationService, SoftAssertions, verify_that

from .models import Error, Pet


PetLike = Union[Pet, Mapping[str, Any]]


def _as_pet(pet: Optional[PetLike]) -> Optional[Pet]:
    if pet is None or isinstance(pet, Pet):
        return pet
    return Pet.model_validate(pet)


class PetVerificationService(ResponseVerificationService):
    """Response verification for the Petstore API."""

    def verify_pet(self, actual: Optional[PetLike], expected: PetLike) -> None:
        """Soft-compare name, and id/tag when the expected pet sets them."""
        actual, expected = _as_pet(actual), _as_pet(expected)
        with allure.step("Verify pet details"):
            logger.info(f"Verifying pet details. Expected: {expected}")
            verify_that(actual is not None, "Pet is missing")
            with SoftAssertions() as soft:
                if expected.id is not None:
                    soft.equal(actual.id, expected.id, "pet id")
                soft.equal(actual.name, expected.name, "pet name")
                if expected.tag is not None:
                    soft.equal(actual.tag, expected.tag, "pet tag")

    def verify_pet_required_fields(self, pet: Optional[PetLike]) -> None:
        pet = _as_pet(pet)
        verify_that(pet is not None, "Pet is missing")
        with SoftAssertions() as soft:
            soft.not_none(pet.id, "pet id")
            soft.check(bool(pet.name and pet.name.strip()), "pet name: expected a non-blank name")

    def verify_pets_within_limit(self, pets: Optional[Sequence[Any]], limit: int) -> None:
        count = len(pets) if pets is not None else 0
        logger.info(f"Verifying pets list size does not exceed limit. Limit: {limit}, Actual: {count}")
        verify_that(pets is not None, "Pets list is missing")
        verify_that(count <= limit, f"Expected at most {limit} pets, got {count}")

    def verify_pets_contain(self, pets: Optional[Sequence[PetLike]], pet_id: int) -> None:
        ids = [_as_pet(pet).id for pet in pets or []]
        verify_that(pet_id in ids, f"Pet {pet_id} not in list {ids}")

    def verify_error_response(self, http_status: int, api_response: ApiResponse) -> Error:
        """Verify an error status and return the body as an Error."""
        with allure.step(f"Verify error response: status {http_status}"):
            self.verify_status_code(http_status, api_response)
            try:
                error = Error.model_validate(api_response.json())
            except ValueError:
                raise AssertionError(
                    f"Error body does not match {{code, message}}: {api_response.raw_body[:500]!r}"
                ) from None
            verify_that(
                error.code == http_status,
                f"Error code {error.code} does not match status {http_status}",
            )
            return error
