"""Signed data, signed transactions and the parameters used to sign a transaction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from web3types.primitives import (
    H160,
    H256,
    U64,
    U256,
    Bytes,
    BytesArray,
    DecodeError,
    _object,
    _required,
)
from web3types.transaction import AccessListItem
from web3types.transaction_request import CallRequest

TRANSACTION_DEFAULT_GAS = U256(100_000)


def _json_u8(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise DecodeError(f"expected an integer from 0 to 255, got {value!r}")
    return value


@dataclass(kw_only=True)
class SignedData:
    """Signed data: the message, its hash and the signature parts."""

    message: bytes
    message_hash: H256
    v: int
    r: H256
    s: H256
    signature: Bytes

    def __post_init__(self) -> None:
        self.message = bytes(self.message)
        if not 0 <= self.v <= 255:
            raise ValueError(f"v value {self.v} out of range for u8")

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "SignedData")
        return cls(
            message=_required(obj, "message", BytesArray.from_json).data,
            message_hash=_required(obj, "messageHash", H256.from_json),
            v=_required(obj, "v", _json_u8),
            r=_required(obj, "r", H256.from_json),
            s=_required(obj, "s", H256.from_json),
            signature=_required(obj, "signature", Bytes.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "message": list(self.message),
            "messageHash": self.message_hash.to_json(),
            "v": self.v,
            "r": self.r.to_json(),
            "s": self.s.to_json(),
            "signature": self.signature.to_json(),
        }


@dataclass(kw_only=True)
class TransactionParameters:
    """Transaction data for signing; unset optional fields are filled in by the signer."""

    nonce: U256 | None = None
    to: H160 | None = None
    gas: U256 = TRANSACTION_DEFAULT_GAS
    gas_price: U256 | None = None
    value: U256 = field(default_factory=U256)
    data: Bytes = field(default_factory=Bytes)
    chain_id: int | None = None
    transaction_type: U64 | None = None
    access_list: list[AccessListItem] | None = None

    @classmethod
    def from_call_request(cls, call):
        """Take the fields of a call request, with defaults for those it leaves unset."""
        return cls(
            to=call.to,
            gas=TRANSACTION_DEFAULT_GAS if call.gas is None else call.gas,
            gas_price=call.gas_price,
            value=U256() if call.value is None else call.value,
            data=Bytes() if call.data is None else call.data,
            transaction_type=call.transaction_type,
            access_list=call.access_list,
        )

    def to_call_request(self) -> CallRequest:
        return CallRequest(
            sender=None,
            to=self.to,
            gas=self.gas,
            gas_price=self.gas_price,
            value=self.value,
            data=self.data,
            transaction_type=self.transaction_type,
            access_list=self.access_list,
        )


@dataclass(kw_only=True)
class SignedTransaction:
    """An offline signed transaction, ready to be sent raw."""

    message_hash: H256
    v: int
    r: H256
    s: H256
    raw_transaction: Bytes
    transaction_hash: H256