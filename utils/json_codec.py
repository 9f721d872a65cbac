"""
JSON convenience wrappers.

JsonCodec turns dataclasses, enums, paths and plain objects into JSON and
back. It holds no mutable state, so one process-wide instance (JSON) can be
shared freely; code that wants a differently configured codec takes one as a
parameter instead.
"""
import dataclasses
import json
import types
import typing
from enum import Enum
from pathlib import PurePath
from typing import Any, Optional, Type, TypeVar


T = TypeVar('T')


class JsonCodec:
    """Encode arbitrary objects to JSON and decode them back into types."""

    def __init__(self, indent: Optional[int] = None, sort_keys: bool = False):
        self.indent = indent
        self.sort_keys = sort_keys

    def to_json(self, obj: Any) -> str:
        """Encode ``obj`` as a JSON string."""
        return json.dumps(obj, default=self._encode_default, indent=self.indent,
                          sort_keys=self.sort_keys, ensure_ascii=False)

    def from_json(self, text: str, cls: Optional[Type[T]] = None) -> Any:
        """
        Parse ``text``; when ``cls`` is given, build an instance of it.

        Dataclasses are rebuilt field by field following their type hints, so
        nested dataclasses, enums and lists of them round-trip.

        Raises:
            json.JSONDecodeError: If text is not valid JSON
            ValueError: If the data does not fit ``cls``
        """
        data = json.loads(text)
        if cls is None:
            return data
        return self._decode(data, cls)

    def deep_copy(self, obj: T) -> T:
        """Return an independent copy of ``obj`` by encoding and decoding it.

        Slow; only meant for small value objects.
        """
        return self.from_json(self.to_json(obj), type(obj))

    @staticmethod
    def _encode_default(obj: Any) -> Any:
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, PurePath):
            return str(obj)
        if isinstance(obj, (set, frozenset, tuple)):
            return list(obj)
        if hasattr(obj, "__dict__"):
            return {k: v for k, v in vars(obj).items() if not k.startswith("_")}
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    def _decode(self, data: Any, cls: Any) -> Any:
        if cls is Any or data is None:
            return data

        origin = typing.get_origin(cls)
        if origin in (typing.Union, types.UnionType):
            args = [a for a in typing.get_args(cls) if a is not type(None)]
            return self._decode(data, args[0]) if len(args) == 1 else data
        if origin in (list, tuple, set, frozenset):
            args = typing.get_args(cls)
            item_type = args[0] if args else Any
            return origin(self._decode(item, item_type) for item in data)
        if origin is dict:
            args = typing.get_args(cls)
            value_type = args[1] if len(args) == 2 else Any
            return {k: self._decode(v, value_type) for k, v in data.items()}

        if isinstance(cls, type) and issubclass(cls, Enum):
            return cls(data)
        if isinstance(cls, type) and issubclass(cls, PurePath):
            return cls(data)
        if dataclasses.is_dataclass(cls):
            if not isinstance(data, dict):
                raise ValueError(f"Expected an object for {cls.__name__}, got {type(data).__name__}")
            hints = typing.get_type_hints(cls)
            kwargs = {}
            for f in dataclasses.fields(cls):
                if f.name in data and f.init:
                    kwargs[f.name] = self._decode(data[f.name], hints.get(f.name, Any))
            return cls(**kwargs)
        if cls in (int, float, str, bool, list, dict):
            return cls(data)
        if isinstance(cls, type) and isinstance(data, dict):
            # Plain class: bypass __init__ and restore attributes
            instance = cls.__new__(cls)
            instance.__dict__.update(data)
            return instance
        return data


JSON = JsonCodec()
"""Process-wide default codec."""


def to_json(obj: Any) -> str:
    """Encode ``obj`` with the default codec."""
    return JSON.to_json(obj)


def from_json(text: str, cls: Optional[Type[T]] = None) -> Any:
    """Decode ``text`` with the default codec."""
    return JSON.from_json(text, cls)
