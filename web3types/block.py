"""Block headers, blocks and the ways a block is identified."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from web3types.primitives import (
    H64,
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

TX = TypeVar("TX")

_TAGS = ("latest", "earliest", "pending")


def _identity(value: Any) -> Any:
    return value


def _default_tx_json(tx: Any) -> Any:
    return tx.to_json() if hasattr(tx, "to_json") else tx


def _author(data) -> H160:
    author = _optional(data, "miner", H160.from_json)
    return H160.zero() if author is None else author


@dataclass
class BlockHeader:
    """A block header as returned by RPC calls."""

    parent_hash: H256
    uncles_hash: H256
    state_root: H256
    transactions_root: H256
    receipts_root: H256
    gas_used: U256
    gas_limit: U256
    extra_data: Bytes
    logs_bloom: H2048
    timestamp: U256
    difficulty: U256
    hash: H256 | None = None
    author: H160 = field(default_factory=H160.zero)
    number: U64 | None = None
    mix_hash: H256 | None = None
    nonce: H64 | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "BlockHeader")
        return cls(
            hash=_optional(obj, "hash", H256.from_json),
            parent_hash=_required(obj, "parentHash", H256.from_json),
            uncles_hash=_required(obj, "sha3Uncles", H256.from_json),
            author=_author(obj),
            state_root=_required(obj, "stateRoot", H256.from_json),
            transactions_root=_required(obj, "transactionsRoot", H256.from_json),
            receipts_root=_required(obj, "receiptsRoot", H256.from_json),
            number=_optional(obj, "number", U64.from_json),
            gas_used=_required(obj, "gasUsed", U256.from_json),
            gas_limit=_required(obj, "gasLimit", U256.from_json),
            extra_data=_required(obj, "extraData", Bytes.from_json),
            logs_bloom=_required(obj, "logsBloom", H2048.from_json),
            timestamp=_required(obj, "timestamp", U256.from_json),
            difficulty=_required(obj, "difficulty", U256.from_json),
            mix_hash=_optional(obj, "mixHash", H256.from_json),
            nonce=_optional(obj, "nonce", H64.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "hash": _to_json_or_none(self.hash),
            "parentHash": self.parent_hash.to_json(),
            "sha3Uncles": self.uncles_hash.to_json(),
            "miner": self.author.to_json(),
            "stateRoot": self.state_root.to_json(),
            "transactionsRoot": self.transactions_root.to_json(),
            "receiptsRoot": self.receipts_root.to_json(),
            "number": _to_json_or_none(self.number),
            "gasUsed": self.gas_used.to_json(),
            "gasLimit": self.gas_limit.to_json(),
            "extraData": self.extra_data.to_json(),
            "logsBloom": self.logs_bloom.to_json(),
            "timestamp": self.timestamp.to_json(),
            "difficulty": self.difficulty.to_json(),
            "mixHash": _to_json_or_none(self.mix_hash),
            "nonce": _to_json_or_none(self.nonce),
        }


@dataclass
class Block(Generic[TX]):
    """A block as returned by RPC calls, generic over its transaction type."""

    hash: H256 | None = None
    parent_hash: H256 = field(default_factory=H256.zero)
    uncles_hash: H256 = field(default_factory=H256.zero)
    author: H160 = field(default_factory=H160.zero)
    state_root: H256 = field(default_factory=H256.zero)
    transactions_root: H256 = field(default_factory=H256.zero)
    receipts_root: H256 = field(default_factory=H256.zero)
    number: U64 | None = None
    gas_used: U256 = field(default_factory=U256)
    gas_limit: U256 = field(default_factory=U256)
    extra_data: Bytes = field(default_factory=Bytes)
    logs_bloom: H2048 | None = None
    timestamp: U256 = field(default_factory=U256)
    difficulty: U256 = field(default_factory=U256)
    total_difficulty: U256 | None = None
    seal_fields: list[Bytes] = field(default_factory=list)
    uncles: list[H256] = field(default_factory=list)
    transactions: list[TX] = field(default_factory=list)
    size: U256 | None = None
    mix_hash: H256 | None = None
    nonce: H64 | None = None

    @classmethod
    def from_json(cls, data, transaction_parser: Callable[[Any], Any] | None = None):
        """Decode a block; transactions go through transaction_parser, kept as-is by default."""
        parse_tx = transaction_parser or _identity
        obj = _object(data, "Block")
        seal_fields = _optional(obj, "sealFields", _list_of(Bytes.from_json))
        return cls(
            hash=_optional(obj, "hash", H256.from_json),
            parent_hash=_required(obj, "parentHash", H256.from_json),
            uncles_hash=_required(obj, "sha3Uncles", H256.from_json),
            author=_author(obj),
            state_root=_required(obj, "stateRoot", H256.from_json),
            transactions_root=_required(obj, "transactionsRoot", H256.from_json),
            receipts_root=_required(obj, "receiptsRoot", H256.from_json),
            number=_optional(obj, "number", U64.from_json),
            gas_used=_required(obj, "gasUsed", U256.from_json),
            gas_limit=_required(obj, "gasLimit", U256.from_json),
            extra_data=_required(obj, "extraData", Bytes.from_json),
            logs_bloom=_optional(obj, "logsBloom", H2048.from_json),
            timestamp=_required(obj, "timestamp", U256.from_json),
            difficulty=_required(obj, "difficulty", U256.from_json),
            total_difficulty=_optional(obj, "totalDifficulty", U256.from_json),
            seal_fields=[] if seal_fields is None else seal_fields,
            uncles=_required(obj, "uncles", _list_of(H256.from_json)),
            transactions=_required(obj, "transactions", _list_of(parse_tx)),
            size=_optional(obj, "size", U256.from_json),
            mix_hash=_optional(obj, "mixHash", H256.from_json),
            nonce=_optional(obj, "nonce", H64.from_json),
        )

    def to_json(self, transaction_serializer: Callable[[Any], Any] | None = None) -> dict[str, Any]:
        dump_tx = transaction_serializer or _default_tx_json
        return {
            "hash": _to_json_or_none(self.hash),
            "parentHash": self.parent_hash.to_json(),
            "sha3Uncles": self.uncles_hash.to_json(),
            "miner": self.author.to_json(),
            "stateRoot": self.state_root.to_json(),
            "transactionsRoot": self.transactions_root.to_json(),
            "receiptsRoot": self.receipts_root.to_json(),
            "number": _to_json_or_none(self.number),
            "gasUsed": self.gas_used.to_json(),
            "gasLimit": self.gas_limit.to_json(),
            "extraData": self.extra_data.to_json(),
            "logsBloom": _to_json_or_none(self.logs_bloom),
            "timestamp": self.timestamp.to_json(),
            "difficulty": self.difficulty.to_json(),
            "totalDifficulty": _to_json_or_none(self.total_difficulty),
            "sealFields": [seal.to_json() for seal in self.seal_fields],
            "uncles": [uncle.to_json() for uncle in self.uncles],
            "transactions": [dump_tx(tx) for tx in self.transactions],
            "size": _to_json_or_none(self.size),
            "mixHash": _to_json_or_none(self.mix_hash),
            "nonce": _to_json_or_none(self.nonce),
        }


@dataclass(frozen=True)
class BlockNumber:
    """A block tag (latest, earliest, pending) or an explicit block number."""

    tag: str = "latest"
    number: U64 | None = None

    def __post_init__(self) -> None:
        if self.number is not None:
            if self.tag != "number":
                raise ValueError("a block number needs the tag 'number'")
            object.__setattr__(self, "number", U64(self.number))
        elif self.tag not in _TAGS:
            raise ValueError(f"unknown block tag {self.tag!r}")

    @classmethod
    def latest(cls):
        return cls("latest")

    @classmethod
    def earliest(cls):
        return cls("earliest")

    @classmethod
    def pending(cls):
        return cls("pending")

    @classmethod
    def of(cls, number):
        return cls("number", U64(number))

    def to_json(self) -> str:
        if self.number is not None:
            return f"0x{int(self.number):x}"
        return self.tag


@dataclass(frozen=True)
class BlockId:
    """A block identified either by hash or by number."""

    hash: H256 | None = None
    number: BlockNumber | None = None

    def __post_init__(self) -> None:
        if (self.hash is None) == (self.number is None):
            raise ValueError("a block id needs exactly one of hash or number")
        if self.hash is not None and not isinstance(self.hash, H256):
            raise TypeError("a block hash must be an H256")
        if self.number is not None and not isinstance(self.number, BlockNumber):
            raise TypeError("a block number must be a BlockNumber")

    @classmethod
    def from_hash(cls, block_hash):
        return cls(hash=block_hash)

    @classmethod
    def from_number(cls, number):
        """Identify a block by a BlockNumber or a plain integer."""
        if not isinstance(number, BlockNumber):
            number = BlockNumber.of(number)
        return cls(number=number)

    def to_json(self) -> Any:
        if self.hash is not None:
            return {"blockHash": self.hash.hex()}
        return self.number.to_json()