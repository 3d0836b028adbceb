"""
Shared lightweight types and helpers used across the step library.
"""

import json
import re
from typing import Any, TypeAlias

# Response and request bodies are handled as raw text until a step needs to
# interpret them. The alias is used to make intent clearer in function signatures.
json_str: TypeAlias = str

# A JSON string literal (group 1) or a run of whitespace outside of one.
_WHITESPACE_OUTSIDE_STRINGS = re.compile(r'("(?:\\.|[^"\\])*")|\s+')


def clean_string(value: str) -> str:
    """
    Remove insignificant whitespace from a JSON-ish fragment.

    Whitespace inside string literals is preserved, so ``{"a b": 1}`` and
    ``{ "a b" : 1 }`` both clean to ``{"a b":1}``. The input does not need to
    be valid JSON, which allows partial fragments to be compared with
    substring checks.

    :param value: Text to clean.
    :returns: The text with whitespace outside string literals removed.
    """
    return _WHITESPACE_OUTSIDE_STRINGS.sub(lambda m: m.group(1) or "", value)


def prettify_json(value: json_str) -> str:
    """
    Indent a JSON document for use in diagnostic messages.

    Text which is not valid JSON is returned with newlines removed and
    surrounding whitespace stripped.

    :param value: Raw JSON text.
    :returns: The indented document, or the flattened text if it is not JSON.
    """
    flattened = value.replace("\n", "").replace("  ", " ").strip()
    try:
        document = json.loads(flattened)
    except ValueError:
        return flattened
    return json.dumps(document, indent=2, ensure_ascii=False)


def stringify(value: Any) -> str:
    """
    Render a JSON-decoded value in its default string form.

    Equality assertions and placeholder substitution compare values through
    this representation, so ``42`` and ``"42"`` are treated as equal.

    - strings are returned unchanged
    - ``True``/``False``/``None`` become ``true``/``false``/``null``
    - numbers use their shortest round-tripping form
    - lists and mappings become compact JSON

    :param value: A value as produced by :func:`json.loads`.
    :returns: The string form of the value.
    """
    match value:
        case str():
            return value
        case bool() | None:
            return json.dumps(value)
        case int() | float():
            return repr(value)
        case _:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
