"""
================================================================================
Petstore Models
================================================================================

    - Pet: {"id": 1, "name": "Buddy", "tag": "friendly"}; only name is
      required by the API, id and tag are dropped from the payload when unset
    - Error: {"code": 404, "message": "..."}

================================================================================
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Pet(BaseModel):
    """
    A pet as sent to and returned by /pets.

    `name` stays optional on the model so requests without it can be sent
    on purpose.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    name: Optional[str] = None
    tag: Optional[str] = None

    @classmethod
    def minimal(cls, name: str) -> "Pet":
        return cls(name=name)

    @classmethod
    def complete(cls, id: int, name: str, tag: Optional[str] = None) -> "Pet":
        return cls(id=id, name=name, tag=tag)


class Error(BaseModel):
    code: int
    message: str
