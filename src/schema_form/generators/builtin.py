"""
Built-in generation functions.
"""

import json

from schema_form.models.values import ValueTree


def json_artifact(tree: ValueTree) -> str:
    """Echo the submission as pretty-printed JSON."""
    return json.dumps(tree, indent=2, ensure_ascii=False)
