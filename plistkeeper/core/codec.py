"""
Property-list codec for dataclass settings.

Turns a dataclass instance into plist bytes and rebuilds it from bytes,
checking each value against the field's type hint. The generic parse path
skips the type checks and is used for diagnostic views.
"""

import dataclasses
import datetime
import enum
import logging
import plistlib
import types
import typing
from typing import Any, Dict, List, Tuple, Type, TypeVar

from ..config.defaults import DEFAULT_FORMAT
from .errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FORMATS = {
    "binary": plistlib.FMT_BINARY,
    "xml": plistlib.FMT_XML,
}

# Binary plists store signed 64-bit or unsigned 64-bit integers
PLIST_INT_MIN = -(2 ** 63)
PLIST_INT_MAX = 2 ** 64 - 1

_UNION_TYPES = tuple(
    t for t in (typing.Union, getattr(types, "UnionType", None)) if t is not None
)


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_optional(hint: Any) -> bool:
    return typing.get_origin(hint) in _UNION_TYPES and type(None) in typing.get_args(hint)


class PlistCodec:
    """
    Encode and decode dataclass settings as property lists.

    Supported values: str, int, float, bool, bytes, datetime, lists and
    tuples, dicts with string keys, nested dataclasses. Enum members are
    stored as their value. A dataclass field holding None is left out of
    the encoded dictionary, since property lists have no null value.
    """

    def __init__(self, fmt: str = DEFAULT_FORMAT):
        if fmt not in FORMATS:
            raise ValueError(
                f"Unknown plist format {fmt!r}, expected one of {sorted(FORMATS)}"
            )
        self.fmt = fmt

    def encode(self, value: Any) -> bytes:
        """
        Serialize a dataclass instance.

        Args:
            value: Settings value to encode

        Returns:
            Property list bytes in the configured format

        Raises:
            EncodeError: If the value or any nested value is unsupported
        """
        if not _is_dataclass_instance(value):
            raise EncodeError(
                f"Settings value must be a dataclass instance, got {type(value).__name__}"
            )

        payload = self._to_plist(value, type(value).__name__)

        try:
            return plistlib.dumps(payload, fmt=FORMATS[self.fmt], sort_keys=True)
        except (TypeError, ValueError, OverflowError) as e:
            raise EncodeError(f"Failed to encode {type(value).__name__}: {e}") from e

    def decode(self, data: bytes, cls: Type[T]) -> T:
        """
        Rebuild a dataclass instance from property list bytes.

        Keys missing from the data fall back to the field default; keys
        the dataclass does not declare are ignored.

        Raises:
            DecodeError: If the bytes are not a plist or do not fit ``cls``
        """
        raw = self.parse(data)
        return self._from_plist(raw, cls, cls.__name__)

    def parse(self, data: bytes) -> Dict[str, Any]:
        """
        Parse property list bytes into a plain dictionary.

        No type hints are involved, so this accepts any dictionary-rooted
        plist, including shapes the typed decode path would reject.

        Raises:
            DecodeError: If the bytes are not a plist or the root is not a dict
        """
        try:
            raw = plistlib.loads(data)
        except Exception as e:
            # plistlib raises several types on malformed input
            raise DecodeError(f"Invalid property list: {e}") from e

        if not isinstance(raw, dict):
            raise DecodeError(
                f"Property list root is {type(raw).__name__}, expected dict"
            )
        return raw

    def fields_of(self, value: Any) -> List[Tuple[str, Any]]:
        """Return (field name, value) pairs of a dataclass instance, in declaration order."""
        if not _is_dataclass_instance(value):
            raise EncodeError(
                f"Settings value must be a dataclass instance, got {type(value).__name__}"
            )
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def _to_plist(self, value: Any, where: str) -> Any:
        if isinstance(value, enum.Enum):
            return self._to_plist(value.value, where)

        if _is_dataclass_instance(value):
            result = {}
            for f in dataclasses.fields(value):
                item = getattr(value, f.name)
                if item is None:
                    continue
                result[f.name] = self._to_plist(item, f"{where}.{f.name}")
            return result

        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            if not PLIST_INT_MIN <= value <= PLIST_INT_MAX:
                raise EncodeError(f"{where}: integer {value} out of property list range")
            return value
        if isinstance(value, (float, str, bytes, datetime.datetime)):
            return value
        if isinstance(value, bytearray):
            return bytes(value)

        if isinstance(value, dict):
            result = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise EncodeError(f"{where}: dict key {key!r} is not a string")
                result[key] = self._to_plist(item, f"{where}[{key!r}]")
            return result

        if isinstance(value, (list, tuple)):
            return [self._to_plist(item, f"{where}[{i}]") for i, item in enumerate(value)]

        if value is None:
            raise EncodeError(f"{where}: None is only allowed as a dataclass field value")

        raise EncodeError(f"{where}: unsupported type {type(value).__name__}")

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _from_plist(self, raw: Any, hint: Any, where: str) -> Any:
        # Unresolved string annotations and Any are taken as-is
        if hint is Any or hint is object or isinstance(hint, str):
            return raw

        origin = typing.get_origin(hint)
        args = typing.get_args(hint)

        if origin in _UNION_TYPES:
            for option in args:
                if option is type(None):
                    continue
                try:
                    return self._from_plist(raw, option, where)
                except DecodeError:
                    continue
            raise DecodeError(f"{where}: {raw!r} does not match {hint}")

        if dataclasses.is_dataclass(hint):
            return self._dataclass_from_plist(raw, hint, where)

        if origin is list or hint is list:
            self._expect(raw, list, where)
            if not args:
                return list(raw)
            return [self._from_plist(item, args[0], f"{where}[{i}]") for i, item in enumerate(raw)]

        if origin is tuple or hint is tuple:
            self._expect(raw, list, where)
            if not args:
                return tuple(raw)
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(
                    self._from_plist(item, args[0], f"{where}[{i}]") for i, item in enumerate(raw)
                )
            if len(args) != len(raw):
                raise DecodeError(f"{where}: expected {len(args)} items, got {len(raw)}")
            return tuple(
                self._from_plist(item, arg, f"{where}[{i}]")
                for i, (item, arg) in enumerate(zip(raw, args))
            )

        if origin is dict or hint is dict:
            self._expect(raw, dict, where)
            if not args:
                return dict(raw)
            return {
                key: self._from_plist(item, args[1], f"{where}[{key!r}]")
                for key, item in raw.items()
            }

        if isinstance(hint, type) and issubclass(hint, enum.Enum):
            try:
                return hint(raw)
            except ValueError as e:
                raise DecodeError(f"{where}: {raw!r} is not a valid {hint.__name__}") from e

        if hint is bool:
            self._expect(raw, bool, where)
            return raw
        if hint is int:
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise DecodeError(f"{where}: expected int, got {type(raw).__name__}")
            return raw
        if hint is float:
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise DecodeError(f"{where}: expected float, got {type(raw).__name__}")
            return float(raw)

        if isinstance(hint, type):
            self._expect(raw, hint, where)
            return raw

        logger.debug(f"{where}: no check for type hint {hint!r}, keeping raw value")
        return raw

    def _dataclass_from_plist(self, raw: Any, cls: type, where: str) -> Any:
        self._expect(raw, dict, where)

        try:
            hints = typing.get_type_hints(cls)
        except (NameError, TypeError):
            hints = {f.name: f.type for f in dataclasses.fields(cls)}

        kwargs = {}
        for f in dataclasses.fields(cls):
            if not f.init:
                continue
            hint = hints.get(f.name, Any)
            if f.name not in raw:
                has_default = (
                    f.default is not dataclasses.MISSING
                    or f.default_factory is not dataclasses.MISSING
                )
                if has_default:
                    continue
                if _is_optional(hint):
                    kwargs[f.name] = None
                    continue
                raise DecodeError(f"{where}: missing required key {f.name!r}")
            kwargs[f.name] = self._from_plist(raw[f.name], hint, f"{where}.{f.name}")

        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"{where}: cannot construct {cls.__name__}: {e}") from e

    @staticmethod
    def _expect(raw: Any, kind: type, where: str):
        if not isinstance(raw, kind):
            raise DecodeError(
                f"{where}: expected {kind.__name__}, got {type(raw).__name__}"
            )
