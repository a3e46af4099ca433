from .serialization import encode, serialize_envelope, serialize_error

__all__ = ["encode", "serialize_envelope", "serialize_error"]
