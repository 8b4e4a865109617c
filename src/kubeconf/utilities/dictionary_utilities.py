""" Collection of dictionary utility functions, used to read loosely typed YAML maps """

import typing as t
from typing import Any, Dict, Optional

import pydash as _

from kubeconf.common.error_types import MalformedDocumentError, MissingRequiredFieldError

T = t.TypeVar("T")

_MISSING: t.Final = object()


def optional_value_at(dikt: Dict[str, Any], key: str) -> Optional[Any]:
    """Value at `key`, None if absent or null"""
    return _.get(dikt, [key])


def value_at(dikt: Dict[str, Any], key: str, block: str, default: Any = _MISSING) -> Any:
    """Value at `key`, `default` if absent. Raise `MissingRequiredFieldError` if absent without a default"""
    value = optional_value_at(dikt, key)
    if value is not None:
        return value
    if default is _MISSING:
        raise MissingRequiredFieldError(field=key, block=block)
    return default


def optional_str_at(dikt: Dict[str, Any], key: str, block: str) -> Optional[str]:
    value = optional_value_at(dikt, key)
    if value is None:
        return None
    return as_type(value, str, key, block)


def str_at(dikt: Dict[str, Any], key: str, block: str) -> str:
    return as_type(value_at(dikt, key, block), str, key, block)


def optional_map_at(dikt: Dict[str, Any], key: str, block: str) -> Optional[Dict[str, Any]]:
    value = optional_value_at(dikt, key)
    if value is None:
        return None
    return as_map(value, f"'{key}' in {block}")


def map_at(dikt: Dict[str, Any], key: str, block: str) -> Dict[str, Any]:
    return as_map(value_at(dikt, key, block), f"'{key}' in {block}")


def as_map(value: Any, block: str) -> Dict[str, Any]:
    if not _.is_dict(value):
        raise MalformedDocumentError(reason=f"expected a map for {block}, got {type(value).__name__}")
    return value


def as_type(value: Any, type_: type[T], key: str, block: str) -> T:
    if not isinstance(value, type_):
        raise MalformedDocumentError(
            reason=f"expected '{key}' in {block} to be of type {type_.__name__}, got {type(value).__name__}"
        )
    return value
