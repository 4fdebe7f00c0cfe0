"""Requests for calling contracts and sending transactions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from web3types.primitives import (
    H160,
    U64,
    U256,
    Bytes,
    DecodeError,
    _json_u64,
    _list_of,
    _object,
    _optional,
    _required,
)
from web3types.transaction import AccessListItem

_U64_MAX = (1 << 64) - 1

_parse_access_list = _list_of(AccessListItem.from_json)


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        out[key] = value.to_json()


def _put_access_list(out: dict[str, Any], access_list: list[AccessListItem] | None) -> None:
    if access_list is not None:
        out["accessList"] = [item.to_json() for item in access_list]


class _ConditionKind(enum.Enum):
    BLOCK = "block"
    TIMESTAMP = "time"


@dataclass(frozen=True)
class TransactionCondition:
    """A minimum block number or unix time before which a transaction is not valid."""

    kind: _ConditionKind
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.kind, _ConditionKind):
            raise TypeError("unknown condition kind")
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"condition value must be an integer, got {self.value!r}")
        if not 0 <= self.value <= _U64_MAX:
            raise ValueError(f"condition value {self.value} out of range for u64")

    @classmethod
    def block(cls, number):
        """Valid from this block number on."""
        return cls(_ConditionKind.BLOCK, number)

    @classmethod
    def timestamp(cls, seconds):
        """Valid from this unix time on."""
        return cls(_ConditionKind.TIMESTAMP, seconds)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "TransactionCondition")
        if len(obj) != 1:
            raise DecodeError(
                f"expected an object with exactly one of `block` or `time`, got {len(obj)} keys"
            )
        ((key, value),) = obj.items()
        try:
            kind = _ConditionKind(key)
        except ValueError:
            raise DecodeError(f"unknown variant `{key}`, expected `block` or `time`") from None
        return cls(kind, _json_u64(value))

    def to_json(self) -> dict[str, int]:
        return {self.kind.value: self.value}


@dataclass(kw_only=True)
class CallRequest:
    """A contract call request; every field may be left unset for gas estimation."""

    sender: H160 | None = None
    to: H160 | None = None
    gas: U256 | None = None
    gas_price: U256 | None = None
    value: U256 | None = None
    data: Bytes | None = None
    transaction_type: U64 | None = None
    access_list: list[AccessListItem] | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "CallRequest")
        return cls(
            sender=_optional(obj, "from", H160.from_json),
            to=_optional(obj, "to", H160.from_json),
            gas=_optional(obj, "gas", U256.from_json),
            gas_price=_optional(obj, "gasPrice", U256.from_json),
            value=_optional(obj, "value", U256.from_json),
            data=_optional(obj, "data", Bytes.from_json),
            transaction_type=_optional(obj, "type", U64.from_json),
            access_list=_optional(obj, "accessList", _parse_access_list),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "from", self.sender)
        _put(out, "to", self.to)
        _put(out, "gas", self.gas)
        _put(out, "gasPrice", self.gas_price)
        _put(out, "value", self.value)
        _put(out, "data", self.data)
        _put(out, "type", self.transaction_type)
        _put_access_list(out, self.access_list)
        return out


@dataclass(kw_only=True)
class TransactionRequest:
    """Parameters for sending a transaction."""

    sender: H160 = field(default_factory=H160.zero)
    to: H160 | None = None
    gas: U256 | None = None
    gas_price: U256 | None = None
    value: U256 | None = None
    data: Bytes | None = None
    nonce: U256 | None = None
    condition: TransactionCondition | None = None
    transaction_type: U64 | None = None
    access_list: list[AccessListItem] | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "TransactionRequest")
        return cls(
            sender=_required(obj, "from", H160.from_json),
            to=_optional(obj, "to", H160.from_json),
            gas=_optional(obj, "gas", U256.from_json),
            gas_price=_optional(obj, "gasPrice", U256.from_json),
            value=_optional(obj, "value", U256.from_json),
            data=_optional(obj, "data", Bytes.from_json),
            nonce=_optional(obj, "nonce", U256.from_json),
            condition=_optional(obj, "condition", TransactionCondition.from_json),
            transaction_type=_optional(obj, "type", U64.from_json),
            access_list=_optional(obj, "accessList", _parse_access_list),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"from": self.sender.to_json()}
        _put(out, "to", self.to)
        _put(out, "gas", self.gas)
        _put(out, "gasPrice", self.gas_price)
        _put(out, "value", self.value)
        _put(out, "data", self.data)
        _put(out, "nonce", self.nonce)
        _put(out, "condition", self.condition)
        _put(out, "type", self.transaction_type)
        _put_access_list(out, self.access_list)
        return out