"""
================================================================================
Serialization Strategies
================================================================================

Pluggable request/response body mapping.

    - JsonSerializationStrategy: standard library json, loose mapping into
      builtin containers; converts to pydantic models / dataclasses only when
      such a target type is requested.
    - PydanticSerializationStrategy: strict mapping through pydantic
      TypeAdapter, honouring field aliases.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import dataclasses
import json
from abc import ABC, abstractmethod
from datetime import date, datetime
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import SerializationError
from .model import ObjectMappingType


_PRIMITIVE_TYPES = (dict, list, str, int, float, bool)


def to_jsonable(obj: Any) -> Any:
    """
    Convert models, dataclasses, enums and dates into JSON-compatible values.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: to_jsonable(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [to_jsonable(item) for item in obj]
    return obj


class SerializationStrategy(ABC):
    """Maps objects to request bodies and response bodies to objects."""

    mapping_type: ObjectMappingType

    @abstractmethod
    def serialize(self, obj: Any) -> str:
        """Serialize an object into a JSON string."""

    @abstractmethod
    def deserialize(self, text: str, target_type: Any = None) -> Any:
        """Deserialize a JSON string into target_type."""


class JsonSerializationStrategy(SerializationStrategy):
    """Standard library json mapping."""

    mapping_type = ObjectMappingType.JSON

    def serialize(self, obj: Any) -> str:
        try:
            return json.dumps(to_jsonable(obj), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Cannot serialize {type(obj).__name__} to JSON: {e}"
            ) from e

    def deserialize(self, text: str, target_type: Any = None) -> Any:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(f"Invalid JSON: {e}") from e

        if target_type is None or target_type is Any:
            return data
        return self._convert(data, target_type)

    def _convert(self, data: Any, target_type: Any) -> Any:
        if isinstance(target_type, type):
            if issubclass(target_type, BaseModel):
                try:
                    return target_type.model_validate(data)
                except ValidationError as e:
                    raise SerializationError(
                        f"Cannot map JSON to {target_type.__name__}: {e}"
                    ) from e
            if dataclasses.is_dataclass(target_type):
                if not isinstance(data, dict):
                    raise SerializationError(
                        f"Cannot map {type(data).__name__} to {target_type.__name__}"
                    )
                try:
                    return target_type(**data)
                except TypeError as e:
                    raise SerializationError(
                        f"Cannot map JSON to {target_type.__name__}: {e}"
                    ) from e
            if target_type in _PRIMITIVE_TYPES:
                if target_type is float and isinstance(data, int) and not isinstance(data, bool):
                    return float(data)
                if not isinstance(data, target_type) or (
                    target_type is int and isinstance(data, bool)
                ):
                    raise SerializationError(
                        f"Expected {target_type.__name__}, got {type(data).__name__}"
                    )
                return data
        # Parametrized generics (List[Dict[str, Any]] ...) are returned as parsed
        return data


@lru_cache(maxsize=128)
def _adapter(target_type: Any) -> TypeAdapter:
    return TypeAdapter(target_type)


class PydanticSerializationStrategy(SerializationStrategy):
    """pydantic TypeAdapter mapping."""

    mapping_type = ObjectMappingType.PYDANTIC

    def serialize(self, obj: Any) -> str:
        try:
            if isinstance(obj, BaseModel):
                return obj.model_dump_json(by_alias=True, exclude_none=True)
            return _adapter(type(obj)).dump_json(
                obj, by_alias=True, exclude_none=True
            ).decode("utf-8")
        except Exception as e:
            raise SerializationError(
                f"Cannot serialize {type(obj).__name__}: {e}"
            ) from e

    def deserialize(self, text: str, target_type: Any = None) -> Any:
        try:
            return _adapter(Any if target_type is None else target_type).validate_json(text)
        except ValidationError as e:
            raise SerializationError(f"Cannot map JSON to {target_type}: {e}") from e
        except TypeError as e:
            # Unhashable or unsupported target types
            raise SerializationError(f"Unsupported target type {target_type!r}: {e}") from e


_STRATEGIES: Dict[ObjectMappingType, Type[SerializationStrategy]] = {
    ObjectMappingType.JSON: JsonSerializationStrategy,
    ObjectMappingType.PYDANTIC: PydanticSerializationStrategy,
}


def strategy_for(mapping_type: Any) -> SerializationStrategy:
    """
    Create the serialization strategy for an object mapping type.

    Args:
        mapping_type: ObjectMappingType or its string value ("json", "pydantic")
    """
    return _STRATEGIES[ObjectMappingType.parse(mapping_type)]()


__all__ = [
    "SerializationStrategy",
    "JsonSerializationStrategy",
    "PydanticSerializationStrategy",
    "strategy_for",
    "to_jsonable",
]
