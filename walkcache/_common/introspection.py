"""Debug helpers for describing runtime values in error messages."""

from typing import Any


def describe_type(value: Any) -> str:
    """Describe the type of ``value`` in a short, stable form.

    Examples:
        >>> describe_type({"a": 1})
        'dict(1)'
        >>> describe_type(1.5)
        'float(1.5)'
        >>> describe_type("abc")
        'str(3) "abc"'
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return f"bool({'true' if value else 'false'})"
    if isinstance(value, (int, float)):
        return f"{type(value).__name__}({value!r})"
    if isinstance(value, str):
        return f'str({len(value)}) "{value}"'
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        return f"{type(value).__name__}({len(value)})"

    cls = type(value)
    return f"object({cls.__module__}.{cls.__qualname__})"
