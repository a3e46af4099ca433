"""Serialization helpers for turning envelopes into JSON-safe dicts."""

from __future__ import annotations

import math
from typing import Any

from fastapi.encoders import jsonable_encoder

from status_collector.collectors.models import Envelope, Status


def serialize_error(error: BaseException) -> dict[str, str]:
    return {"type": type(error).__name__, "message": str(error)}


def _encode_float(value: float) -> float | str:
    # JSON has no NaN/Infinity
    return value if math.isfinite(value) else repr(value)


def encode(value: Any) -> Any:
    """JSON-encode an arbitrary collector payload, falling back to ``repr``."""
    if isinstance(value, Status):
        return encode(value.to_dict())
    if isinstance(value, BaseException):
        return serialize_error(value)
    try:
        return jsonable_encoder(
            value,
            custom_encoder={
                Status: lambda s: encode(s.to_dict()),
                BaseException: serialize_error,
                float: _encode_float,
            },
        )
    except (TypeError, ValueError):
        return repr(value)


def serialize_envelope(envelope: Envelope) -> dict[str, Any]:
    return {key: encode(value) for key, value in envelope.to_dict().items()}
