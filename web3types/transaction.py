"""Transactions, receipts and access lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from web3types.log import Log
from web3types.primitives import (
    H160,
    H256,
    H2048,
    U64,
    U256,
    Bytes,
    _list_of,
    _object,
    _optional,
    _required,
    _to_json_or_none,
)


@dataclass(kw_only=True)
class AccessListItem:
    """An address and the storage keys a transaction accesses there."""

    address: H160 = field(default_factory=H160.zero)
    storage_keys: list[H256] = field(default_factory=list)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "AccessListItem")
        return cls(
            address=_required(obj, "address", H160.from_json),
            storage_keys=_required(obj, "storageKeys", _list_of(H256.from_json)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address.to_json(),
            "storageKeys": [key.to_json() for key in self.storage_keys],
        }


_parse_access_list = _list_of(AccessListItem.from_json)


def _put_optional(out: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        out[key] = value.to_json()


@dataclass(kw_only=True)
class Transaction:
    """A transaction, pending or in the chain."""

    hash: H256 = field(default_factory=H256.zero)
    nonce: U256 = field(default_factory=U256)
    block_hash: H256 | None = None
    block_number: U64 | None = None
    transaction_index: U64 | None = None
    sender: H160 | None = None
    to: H160 | None = None
    value: U256 = field(default_factory=U256)
    gas_price: U256 = field(default_factory=U256)
    gas: U256 = field(default_factory=U256)
    input: Bytes = field(default_factory=Bytes)
    v: U64 | None = None
    r: U256 | None = None
    s: U256 | None = None
    raw: Bytes | None = None
    transaction_type: U64 | None = None
    access_list: list[AccessListItem] | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "Transaction")
        return cls(
            hash=_required(obj, "hash", H256.from_json),
            nonce=_required(obj, "nonce", U256.from_json),
            block_hash=_optional(obj, "blockHash", H256.from_json),
            block_number=_optional(obj, "blockNumber", U64.from_json),
            transaction_index=_optional(obj, "transactionIndex", U64.from_json),
            sender=_optional(obj, "from", H160.from_json),
            to=_optional(obj, "to", H160.from_json),
            value=_required(obj, "value", U256.from_json),
            gas_price=_required(obj, "gasPrice", U256.from_json),
            gas=_required(obj, "gas", U256.from_json),
            input=_required(obj, "input", Bytes.from_json),
            v=_optional(obj, "v", U64.from_json),
            r=_optional(obj, "r", U256.from_json),
            s=_optional(obj, "s", U256.from_json),
            raw=_optional(obj, "raw", Bytes.from_json),
            transaction_type=_optional(obj, "type", U64.from_json),
            access_list=_optional(obj, "accessList", _parse_access_list),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "hash": self.hash.to_json(),
            "nonce": self.nonce.to_json(),
            "blockHash": _to_json_or_none(self.block_hash),
            "blockNumber": _to_json_or_none(self.block_number),
            "transactionIndex": _to_json_or_none(self.transaction_index),
        }
        _put_optional(out, "from", self.sender)
        out.update(
            {
                "to": _to_json_or_none(self.to),
                "value": self.value.to_json(),
                "gasPrice": self.gas_price.to_json(),
                "gas": self.gas.to_json(),
                "input": self.input.to_json(),
            }
        )
        _put_optional(out, "v", self.v)
        _put_optional(out, "r", self.r)
        _put_optional(out, "s", self.s)
        _put_optional(out, "raw", self.raw)
        _put_optional(out, "type", self.transaction_type)
        if self.access_list is not None:
            out["accessList"] = [item.to_json() for item in self.access_list]
        return out


@dataclass(kw_only=True)
class Receipt:
    """Details of an executed transaction."""

    transaction_hash: H256 = field(default_factory=H256.zero)
    transaction_index: U64 = field(default_factory=U64)
    block_hash: H256 | None = None
    block_number: U64 | None = None
    cumulative_gas_used: U256 = field(default_factory=U256)
    gas_used: U256 | None = None
    contract_address: H160 | None = None
    logs: list[Log] = field(default_factory=list)
    status: U64 | None = None
    root: H256 | None = None
    logs_bloom: H2048 = field(default_factory=H2048.zero)
    transaction_type: U64 | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "Receipt")
        return cls(
            transaction_hash=_required(obj, "transactionHash", H256.from_json),
            transaction_index=_required(obj, "transactionIndex", U64.from_json),
            block_hash=_optional(obj, "blockHash", H256.from_json),
            block_number=_optional(obj, "blockNumber", U64.from_json),
            cumulative_gas_used=_required(obj, "cumulativeGasUsed", U256.from_json),
            gas_used=_optional(obj, "gasUsed", U256.from_json),
            contract_address=_optional(obj, "contractAddress", H160.from_json),
            logs=_required(obj, "logs", _list_of(Log.from_json)),
            status=_optional(obj, "status", U64.from_json),
            root=_optional(obj, "root", H256.from_json),
            logs_bloom=_required(obj, "logsBloom", H2048.from_json),
            transaction_type=_optional(obj, "type", U64.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "transactionHash": self.transaction_hash.to_json(),
            "transactionIndex": self.transaction_index.to_json(),
            "blockHash": _to_json_or_none(self.block_hash),
            "blockNumber": _to_json_or_none(self.block_number),
            "cumulativeGasUsed": self.cumulative_gas_used.to_json(),
            "gasUsed": _to_json_or_none(self.gas_used),
            "contractAddress": _to_json_or_none(self.contract_address),
            "logs": [log.to_json() for log in self.logs],
            "status": _to_json_or_none(self.status),
            "root": _to_json_or_none(self.root),
            "logsBloom": self.logs_bloom.to_json(),
        }
        _put_optional(out, "type", self.transaction_type)
        return out


@dataclass(kw_only=True)
class RawTransaction:
    """A signed but not yet sent transaction, with its raw bytes."""

    raw: Bytes = field(default_factory=Bytes)
    tx: Transaction = field(default_factory=Transaction)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "RawTransaction")
        return cls(
            raw=_required(obj, "raw", Bytes.from_json),
            tx=_required(obj, "tx", Transaction.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"raw": self.raw.to_json(), "tx": self.tx.to_json()}