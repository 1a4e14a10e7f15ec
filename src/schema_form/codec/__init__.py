"""
Form data codec: flat submission pairs <-> nested value tree.
"""

from schema_form.codec.form_data import (
    decode,
    encode,
    format_leaf,
    join_path,
    lookup,
    parse_key,
)

__all__ = [
    "decode",
    "encode",
    "format_leaf",
    "join_path",
    "lookup",
    "parse_key",
]
