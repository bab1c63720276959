from collections.abc import Mapping
from types import MappingProxyType


def deep_merge(base, other):
    """Return a new dict with `other` merged onto `base`.

    Nested mappings are merged key by key; any other value in `other` replaces
    the one in `base`. Neither argument is modified.
    """
    merged = thaw(base or {})
    for key, value in (other or {}).items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = thaw(value)
    return merged


def freeze_mapping(value):
    """Read-only copy of a (nested) mapping."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_mapping(item) for key, item in value.items()})
    return value


def thaw(value):
    """Plain, mutable dict copy of a mapping built by `freeze_mapping`."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    return value
