"""Fixed-size hashes, bounded unsigned integers and byte strings used on the wire."""

from __future__ import annotations

import operator
import string
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

T = TypeVar("T")

_HEX_DIGITS = frozenset(string.hexdigits)
_U64_MAX = (1 << 64) - 1


class DecodeError(ValueError):
    """Raised when a JSON value cannot be decoded into the expected type."""


def _strip_prefix(text: Any, required: bool, what: str) -> str:
    if not isinstance(text, str):
        raise DecodeError(f"expected a string for {what}, got {type(text).__name__}")
    if text.startswith("0x"):
        return text[2:]
    if required:
        raise DecodeError(f"invalid value {text!r} for {what}: expected 0x prefix")
    return text


def _decode_hex_digits(digits: str, what: str) -> bytes:
    if not _HEX_DIGITS.issuperset(digits):
        raise DecodeError(f"invalid hex character in {what}")
    if len(digits) % 2:
        raise DecodeError(f"odd number of hex digits in {what}")
    return bytes.fromhex(digits)


def _object(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DecodeError(f"expected a JSON object for {what}, got {type(data).__name__}")
    return data


def _required(data: Mapping[str, Any], key: str, parse: Callable[[Any], T]) -> T:
    try:
        value = data[key]
    except KeyError:
        raise DecodeError(f"missing field `{key}`") from None
    return parse(value)


def _optional(data: Mapping[str, Any], key: str, parse: Callable[[Any], T]) -> T | None:
    value = data.get(key)
    return None if value is None else parse(value)


def _list_of(parse: Callable[[Any], T]) -> Callable[[Any], list[T]]:
    def parse_list(value: Any) -> list[T]:
        if not isinstance(value, list):
            raise DecodeError(f"expected a JSON array, got {type(value).__name__}")
        return [parse(item) for item in value]

    return parse_list


def _to_json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


def _json_u64(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"expected an unsigned integer, got {value!r}")
    if not 0 <= value <= _U64_MAX:
        raise DecodeError(f"integer {value} out of range for u64")
    return value


@dataclass(frozen=True, order=True, repr=False)
class FixedHash:
    """A hash of a fixed number of bytes; subclasses set SIZE."""

    data: bytes
    SIZE: ClassVar[int] = 0

    def __post_init__(self) -> None:
        if not self.SIZE:
            raise TypeError("FixedHash has no size; use a sized subclass such as H256")
        data = bytes(self.data)
        if len(data) != self.SIZE:
            raise ValueError(
                f"{type(self).__name__} needs {self.SIZE} bytes, got {len(data)}"
            )
        object.__setattr__(self, "data", data)

    @classmethod
    def _from_digits(cls, digits: str):
        if len(digits) != 2 * cls.SIZE:
            raise DecodeError(
                f"invalid length {len(digits)} for {cls.__name__}: expected {2 * cls.SIZE} hex digits"
            )
        return cls(_decode_hex_digits(digits, cls.__name__))

    @classmethod
    def from_hex(cls, text):
        """Parse hex text with or without a 0x prefix."""
        return cls._from_digits(_strip_prefix(text, False, cls.__name__))

    @classmethod
    def from_low_u64_be(cls, value):
        """Build a hash whose low-order bytes hold a 64-bit big-endian value."""
        try:
            low = operator.index(value).to_bytes(8, "big")
        except OverflowError:
            raise ValueError(f"{value} does not fit in 64 bits") from None
        if cls.SIZE < 8:
            low = low[8 - cls.SIZE:]
        return cls(bytes(cls.SIZE - len(low)) + low)

    @classmethod
    def from_uint(cls, value):
        """Build a hash holding the big-endian bytes of an unsigned integer."""
        try:
            return cls(operator.index(value).to_bytes(cls.SIZE, "big"))
        except OverflowError:
            raise ValueError(f"{value} does not fit in {cls.__name__}") from None

    @classmethod
    def zero(cls):
        return cls(bytes(cls.SIZE))

    def hex(self) -> str:
        """The full 0x-prefixed lower-case hex form."""
        return "0x" + self.data.hex()

    def to_json(self) -> str:
        return self.hex()

    @classmethod
    def from_json(cls, data):
        return cls._from_digits(_strip_prefix(data, True, cls.__name__))

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return f"0x{self.data[:2].hex()}…{self.data[-2:].hex()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()!r})"

    def __format__(self, spec: str) -> str:
        if spec == "x":
            return self.data.hex()
        if spec == "#x":
            return self.hex()
        return format(str(self), spec)


class H64(FixedHash):
    """An 8-byte hash."""

    SIZE = 8


class H128(FixedHash):
    """A 16-byte hash."""

    SIZE = 16


class H160(FixedHash):
    """A 20-byte hash, the size of an account address."""

    SIZE = 20


class H256(FixedHash):
    """A 32-byte hash."""

    SIZE = 32


class H512(FixedHash):
    """A 64-byte hash."""

    SIZE = 64


class H520(FixedHash):
    """A 65-byte hash."""

    SIZE = 65


class H2048(FixedHash):
    """A 256-byte logs bloom."""

    SIZE = 256


class UInt(int):
    """An unsigned integer bounded to BITS bits; subclasses set BITS."""

    BITS: ClassVar[int] = 0

    def __new__(cls, value=0):
        if not cls.BITS:
            raise TypeError("UInt has no width; use a sized subclass such as U256")
        if isinstance(value, (str, bytes, bytearray)):
            raise TypeError(f"{cls.__name__} takes an integer; use from_hex or from_bytes_be")
        number = operator.index(value)
        if number < 0 or number.bit_length() > cls.BITS:
            raise ValueError(f"{number} does not fit in {cls.__name__}")
        return super().__new__(cls, number)

    @classmethod
    def from_hex(cls, text):
        """Parse a 0x-prefixed hex quantity."""
        digits = _strip_prefix(text, True, cls.__name__)
        if not digits:
            raise DecodeError(f"empty hex string for {cls.__name__}")
        if len(digits) > cls.BITS // 4:
            raise DecodeError(f"too many hex digits for {cls.__name__}")
        if not _HEX_DIGITS.issuperset(digits):
            raise DecodeError(f"invalid hex character in {cls.__name__}")
        return cls(int(digits, 16))

    @classmethod
    def from_bytes_be(cls, data):
        raw = bytes(data)
        if len(raw) > cls.BITS // 8:
            raise ValueError(f"{len(raw)} bytes do not fit in {cls.__name__}")
        return cls(int.from_bytes(raw, "big"))

    def low_u64(self) -> int:
        return int(self) & _U64_MAX

    def to_json(self) -> str:
        return f"0x{int(self):x}"

    @classmethod
    def from_json(cls, data):
        return cls.from_hex(data)

    def __str__(self) -> str:
        return int.__repr__(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"


class U64(UInt):
    """A 64-bit unsigned integer."""

    BITS = 64


class U128(UInt):
    """A 128-bit unsigned integer."""

    BITS = 128


class U256(UInt):
    """A 256-bit unsigned integer."""

    BITS = 256


@dataclass(frozen=True, repr=False)
class Bytes:
    """Raw bytes, written on the wire as 0x-prefixed hex."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def from_hex(cls, text):
        """Parse hex text with or without a 0x prefix."""
        return cls(_decode_hex_digits(_strip_prefix(text, False, "Bytes"), "Bytes"))

    def to_json(self) -> str:
        return "0x" + self.data.hex()

    @classmethod
    def from_json(cls, data):
        return cls(_decode_hex_digits(_strip_prefix(data, True, "Bytes"), "Bytes"))

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"Bytes({self.to_json()!r})"


@dataclass(frozen=True)
class BytesArray:
    """Bytes written on the wire as a JSON array of numbers."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def to_json(self) -> list[int]:
        return list(self.data)

    @classmethod
    def from_json(cls, data):
        if not isinstance(data, list):
            raise DecodeError(f"expected a JSON array, got {type(data).__name__}")
        for item in data:
            if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
                raise DecodeError(f"invalid byte value {item!r}")
        return cls(bytes(data))


Address = H160
Index = U64