"""
Runtime value types.

The nested value tree is a closed sum type: every node is a string, a
number, a boolean, a list of nodes or a name -> node mapping. Consumers
branch on these five cases with isinstance checks, in this order
(bool before int, since bool is an int subclass).
"""

from typing import Union

NestedValue = Union[str, bool, int, float, list["NestedValue"], dict[str, "NestedValue"]]

# The root of a decoded submission is always an object
ValueTree = dict[str, NestedValue]

# field path ("attendees[1].email") -> one human-readable message
ErrorSet = dict[str, str]

# A decoded key segment: member name or list index
PathSegment = Union[str, int]


def is_empty(value: object) -> bool:
    """Whether a value counts as "not provided" for required checks."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False
