"""Logs produced by transactions and the filters used to query them."""

from __future__ import annotations

import enum
import operator
from dataclasses import dataclass, field, replace
from typing import Any

from web3types.block import BlockNumber
from web3types.primitives import (
    H160,
    H256,
    U64,
    U256,
    Bytes,
    DecodeError,
    _list_of,
    _object,
    _optional,
    _required,
    _to_json_or_none,
)


def _parse_str(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {type(value).__name__}")
    return value


def _parse_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"expected a boolean, got {type(value).__name__}")
    return value


def _value_or_array(items: tuple[Any, ...]) -> Any:
    """Write no items as null, one item as itself and several as an array."""
    if not items:
        return None
    if len(items) == 1:
        return items[0].to_json()
    return [item.to_json() for item in items]


@dataclass(kw_only=True)
class Log:
    """A log produced by a transaction."""

    address: H160
    topics: list[H256]
    data: Bytes
    block_hash: H256 | None = None
    block_number: U64 | None = None
    transaction_hash: H256 | None = None
    transaction_index: U64 | None = None
    log_index: U256 | None = None
    transaction_log_index: U256 | None = None
    log_type: str | None = None
    removed: bool | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "Log")
        return cls(
            address=_required(obj, "address", H160.from_json),
            topics=_required(obj, "topics", _list_of(H256.from_json)),
            data=_required(obj, "data", Bytes.from_json),
            block_hash=_optional(obj, "blockHash", H256.from_json),
            block_number=_optional(obj, "blockNumber", U64.from_json),
            transaction_hash=_optional(obj, "transactionHash", H256.from_json),
            transaction_index=_optional(obj, "transactionIndex", U64.from_json),
            log_index=_optional(obj, "logIndex", U256.from_json),
            transaction_log_index=_optional(obj, "transactionLogIndex", U256.from_json),
            log_type=_optional(obj, "logType", _parse_str),
            removed=_optional(obj, "removed", _parse_bool),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address.to_json(),
            "topics": [topic.to_json() for topic in self.topics],
            "data": self.data.to_json(),
            "blockHash": _to_json_or_none(self.block_hash),
            "blockNumber": _to_json_or_none(self.block_number),
            "transactionHash": _to_json_or_none(self.transaction_hash),
            "transactionIndex": _to_json_or_none(self.transaction_index),
            "logIndex": _to_json_or_none(self.log_index),
            "transactionLogIndex": _to_json_or_none(self.transaction_log_index),
            "logType": self.log_type,
            "removed": self.removed,
        }

    def is_removed(self) -> bool:
        """True if the log has been removed, by flag or by log type."""
        if self.removed is not None:
            return self.removed
        return self.log_type == "removed"


@dataclass(frozen=True)
class Filter:
    """A log filter; build it with FilterBuilder."""

    from_block: BlockNumber | None = None
    to_block: BlockNumber | None = None
    block_hash: H256 | None = None
    address: tuple[H160, ...] | None = None
    topics: tuple[tuple[H256, ...] | None, ...] | None = None
    limit: int | None = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.from_block is not None:
            out["fromBlock"] = self.from_block.to_json()
        if self.to_block is not None:
            out["toBlock"] = self.to_block.to_json()
        if self.block_hash is not None:
            out["blockHash"] = self.block_hash.to_json()
        if self.address is not None:
            out["address"] = _value_or_array(self.address)
        if self.topics is not None:
            out["topics"] = [
                None if topic is None else _value_or_array(topic) for topic in self.topics
            ]
        if self.limit is not None:
            out["limit"] = self.limit
        return out


@dataclass(frozen=True)
class FilterBuilder:
    """Builds a Filter; each setter returns a new builder."""

    state: Filter = field(default_factory=Filter)

    def from_block(self, block):
        """Set the first block; clears any block hash."""
        return FilterBuilder(replace(self.state, block_hash=None, from_block=block))

    def to_block(self, block):
        """Set the last block; clears any block hash."""
        return FilterBuilder(replace(self.state, block_hash=None, to_block=block))

    def block_hash(self, block_hash):
        """Set the block hash; clears the block range."""
        return FilterBuilder(
            replace(self.state, from_block=None, to_block=None, block_hash=block_hash)
        )

    def address(self, addresses):
        return FilterBuilder(replace(self.state, address=tuple(addresses)))

    def topics(self, topic1, topic2, topic3, topic4):
        """Set up to four topic positions; trailing unset positions are dropped."""
        topics = [None if topic is None else tuple(topic) for topic in (topic1, topic2, topic3, topic4)]
        while topics and topics[-1] is None:
            topics.pop()
        return FilterBuilder(replace(self.state, topics=tuple(topics)))

    def topic_filter(self, topic_filter):
        """Set the topics from a TopicFilter."""
        return self.topics(
            topic_filter.topic0.to_option(),
            topic_filter.topic1.to_option(),
            topic_filter.topic2.to_option(),
            topic_filter.topic3.to_option(),
        )

    def limit(self, limit):
        count = operator.index(limit)
        if count < 0:
            raise ValueError(f"limit must not be negative, got {count}")
        return FilterBuilder(replace(self.state, limit=count))

    def build(self) -> Filter:
        return self.state


class _TopicKind(enum.Enum):
    ANY = "any"
    ONE_OF = "one_of"
    THIS = "this"


@dataclass(frozen=True)
class Topic:
    """One topic position of a topic filter: any value, one of several, or exactly one."""

    kind: _TopicKind = _TopicKind.ANY
    values: tuple[Any, ...] = ()

    @classmethod
    def any(cls):
        return cls(_TopicKind.ANY, ())

    @classmethod
    def one_of(cls, values):
        return cls(_TopicKind.ONE_OF, tuple(values))

    @classmethod
    def this(cls, value):
        return cls(_TopicKind.THIS, (value,))

    def to_option(self) -> list[Any] | None:
        """None for any value, otherwise the list of accepted values."""
        if self.kind is _TopicKind.ANY:
            return None
        return list(self.values)


@dataclass(frozen=True)
class TopicFilter:
    """A filter over the four topic positions of a log."""

    topic0: Topic = field(default_factory=Topic.any)
    topic1: Topic = field(default_factory=Topic.any)
    topic2: Topic = field(default_factory=Topic.any)
    topic3: Topic = field(default_factory=Topic.any)