"""
Shared entities between seeding and serving
Maps to the feature records kept in the store
"""

import math
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    AMOUNT_FIELD,
    FEATURE_VECTOR_LENGTH,
    LABEL_FIELD,
    SET_NAME_FIELD,
)


class MissingLabelError(Exception):
    """Stored record has no usable ground-truth label"""

    status_code = 400

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


def to_number(value: Any, default: float) -> float:
    """
    Lenient numeric coercion

    Returns a finite float, or `default` when the value is missing,
    non-numeric or not finite. Numeric strings are parsed.
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        number = float(value)
    except (ValueError, TypeError):
        return default

    if not math.isfinite(number):
        return default
    return number


class FeatureRecord(BaseModel):
    """
    Feature record stored per user
    Known fields are named, component fields (v0..v27) and anything else
    stay as extras and are read through `number()`
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    label: Optional[Any] = Field(default=None, alias=LABEL_FIELD)
    amount: Optional[Any] = Field(default=None, alias=AMOUNT_FIELD)
    set_name: Optional[str] = Field(default=None, alias=SET_NAME_FIELD)

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "FeatureRecord":
        """Build from a raw field mapping as returned by the store"""
        return cls.model_validate(dict(fields))

    def raw(self, field: str) -> Any:
        """Raw stored value by wire name (None if absent)"""
        if field == LABEL_FIELD:
            return self.label
        if field == AMOUNT_FIELD:
            return self.amount
        if field == SET_NAME_FIELD:
            return self.set_name
        return (self.model_extra or {}).get(field)

    def number(self, field: str, default: float) -> float:
        """Typed accessor: the field as a float, or `default`"""
        return to_number(self.raw(field), default)

    def amount_value(self, default: float) -> float:
        return to_number(self.amount, default)


class FeatureVector:
    """Dense model input of fixed length"""

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[float], length: int = FEATURE_VECTOR_LENGTH):
        values = tuple(float(v) for v in values)
        if len(values) != length:
            raise ValueError(f"Feature vector must have {length} values, got {len(values)}")
        self._values: Tuple[float, ...] = values

    @property
    def values(self) -> Tuple[float, ...]:
        return self._values

    def as_batch(self) -> List[List[float]]:
        """Single-row batch shape expected by the model server"""
        return [list(self._values)]

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __iter__(self):
        return iter(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, FeatureVector):
            return self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"FeatureVector(len={len(self._values)})"
