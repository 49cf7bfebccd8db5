from .models import ExplicitKey, FieldSpec, KeyStrategy, Normalize
from .normalize import normalize_key
from .resolve import MissingKey, resolve_fields, resolve_key

__all__ = [
    "ExplicitKey",
    "FieldSpec",
    "KeyStrategy",
    "MissingKey",
    "Normalize",
    "normalize_key",
    "resolve_fields",
    "resolve_key",
]
