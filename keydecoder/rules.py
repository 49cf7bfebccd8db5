"""
Deterministic key normalization rules.

This file exists to make the underscore policy explicit and enforceable.
"""

KEY_SEPARATOR = "_"
ACCEPTED_SUFFIX = ".json"
