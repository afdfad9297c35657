from typing import Mapping, Optional, Sequence, Union

_MISSING = object()


def _read_field(node: object, key: str) -> object:
    """Read a single key from a mapping or an attribute from an object."""
    if node is None:
        return _MISSING
    if isinstance(node, Mapping):
        return node[key] if key in node else _MISSING  # confined indexing
    return getattr(node, key, _MISSING)


def _read_path(node: object, path: Sequence[Union[str, int]]) -> Optional[object]:
    """
    Traverse a nested structure of dicts/lists/objects using a path of keys/indices.

    SDK trade objects arrive as plain dicts, namespaces or proxy objects depending on
    the caller, so string parts are resolved as mapping keys first and attributes
    second. Missing parts yield None instead of raising.
    """
    current: object = node
    for part in path:
        if isinstance(part, int):
            if isinstance(current, (list, tuple)) and 0 <= part < len(current):
                current = current[part]
            else:
                return None
        else:
            value = _read_field(current, part)
            if value is _MISSING:
                return None
            current = value
    return current


def _first_present(node: object, paths: Sequence[Sequence[Union[str, int]]]) -> Optional[object]:
    """Return the first non-empty value found along the given paths."""
    for path in paths:
        value = _read_path(node, path)
        if value is not None and value != "":
            return value
    return None


def _read_callable(node: object, path: Sequence[Union[str, int]]) -> Optional[object]:
    """Return the value at path only if it is callable."""
    value = _read_path(node, path)
    return value if callable(value) else None
