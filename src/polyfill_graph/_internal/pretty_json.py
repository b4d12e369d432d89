"""JSON layout for generated data files.

Objects are expanded one key per line, arrays stay inline. The generated
files are checked in, so the layout must be byte-stable:

Rules:
- Two-space indentation
- No space before colons, one space after
- Arrays (and everything inside them) rendered on one line: [1, 2, 3]
- Keys kept in insertion order
- UTF-8 output (no ASCII escaping)
"""

import json
from typing import Any


def pretty_dumps(obj: Any, indent: str = "  ") -> str:
    """Serialize obj with expanded objects and compact arrays.

    Args:
        obj: JSON-compatible Python object

    Returns:
        JSON text without trailing newline
    """
    return _render(obj, 0, indent)


def _render(obj: Any, depth: int, indent: str) -> str:
    if isinstance(obj, dict):
        if not obj:
            return "{}"
        pad = indent * (depth + 1)
        members = []
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be strings, got {type(key).__name__}")
            members.append(f"{pad}{json.dumps(key, ensure_ascii=False)}: {_render(value, depth + 1, indent)}")
        return "{\n" + ",\n".join(members) + "\n" + indent * depth + "}"
    return json.dumps(obj, ensure_ascii=False, separators=(", ", ": "))
