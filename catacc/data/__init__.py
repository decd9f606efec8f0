"""Label vector loading and validation."""

from .labels import (
    InvalidInputKindError,
    LengthMismatchError,
    as_label_vector,
    check_same_length,
    load_label_vectors,
)

__all__ = [
    "InvalidInputKindError",
    "LengthMismatchError",
    "as_label_vector",
    "check_same_length",
    "load_label_vectors",
]
