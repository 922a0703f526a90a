from __future__ import annotations

import dataclasses
import importlib
import json
import types
import typing
from typing import Any


def type_tag(cls: type) -> str:
    return f"{cls.__module__}:{cls.__qualname__}"


def resolve_type_tag(tag: str) -> type:
    """Import the type named by a ``module:qualname`` tag."""
    if not isinstance(tag, str) or ":" not in tag:
        raise ValueError(f"Malformed state type tag: {tag!r}")
    module_name, _, qualname = tag.partition(":")
    if not module_name or not qualname:
        raise ValueError(f"Malformed state type tag: {tag!r}")
    target: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        target = getattr(target, part)
    if not isinstance(target, type):
        raise ValueError(f"State type tag {tag!r} does not name a type")
    return target


class JsonStateSerializer:
    """Serializes view-model state as JSON.

    Dataclass states are written field by field and rebuilt with keyword
    construction, following the field annotations into nested dataclasses;
    anything else must already be a JSON value.
    """

    def __init__(self, *, indent: int | None = None, sort_keys: bool = True) -> None:
        self._indent = indent
        self._sort_keys = sort_keys

    def serialize(self, state: Any, cls: type) -> str:
        if dataclasses.is_dataclass(state) and not isinstance(state, type):
            payload = dataclasses.asdict(state)
        else:
            payload = state
        return json.dumps(payload, indent=self._indent, sort_keys=self._sort_keys)

    def deserialize(self, text: str, cls: type) -> Any:
        data = json.loads(text)
        if dataclasses.is_dataclass(cls):
            if not isinstance(data, dict):
                raise ValueError(f"Expected an object for {cls.__qualname__}, got {type(data).__name__}")
            return _rebuild(data, cls)
        if cls is type(None) or isinstance(data, cls):
            return data
        return cls(data)


def _rebuild(data: Any, hint: Any) -> Any:
    """Turn decoded JSON back into ``hint``, descending into dataclass fields."""
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        if not isinstance(data, dict):
            return data
        hints = _field_hints(hint)
        kwargs = {
            field.name: _rebuild(data[field.name], hints.get(field.name, Any))
            for field in dataclasses.fields(hint)
            if field.init and field.name in data
        }
        return hint(**kwargs)

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin in (typing.Union, types.UnionType):
        if data is None:
            return None
        for arg in args:
            if arg is not type(None):
                rebuilt = _rebuild(data, arg)
                if rebuilt is not data:
                    return rebuilt
        return data
    if origin is list and args and isinstance(data, list):
        return [_rebuild(value, args[0]) for value in data]
    if origin is tuple and args and isinstance(data, list):
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_rebuild(value, args[0]) for value in data)
        return tuple(_rebuild(value, arg) for value, arg in zip(data, args))
    if origin is dict and len(args) == 2 and isinstance(data, dict):
        return {name: _rebuild(value, args[1]) for name, value in data.items()}
    return data


def _field_hints(cls: type) -> dict:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references leave those fields as plain JSON.
        return {field.name: field.type for field in dataclasses.fields(cls)}
