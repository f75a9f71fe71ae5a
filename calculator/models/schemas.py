from __future__ import annotations

import math

from pydantic import BaseModel, field_serializer


def as_whole_number(value: float) -> float | int:
    """Return ``value`` as an ``int`` when it is a finite whole number.

    Keeps ``1024.0`` on the wire as ``1024``; above 1e21 and for NaN or
    infinities the float is returned unchanged.
    """

    if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


class SuccessEnvelope(BaseModel):
    statuscode: int = 200
    data: float

    @field_serializer("data")
    def _serialize_data(self, data: float) -> float | int:
        return as_whole_number(data)


class ErrorEnvelope(BaseModel):
    statuscode: int = 500
    msg: str


Envelope = SuccessEnvelope | ErrorEnvelope
