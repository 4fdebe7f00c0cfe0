"""Peer information and pending-transaction filters of Parity/OpenEthereum nodes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any

from web3types.primitives import (
    H160,
    U64,
    U256,
    DecodeError,
    _json_u64,
    _list_of,
    _object,
    _optional,
    _required,
    _to_json_or_none,
)

_U32_MAX = (1 << 32) - 1


def _parse_str(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {type(value).__name__}")
    return value


def _json_u32(value: Any) -> int:
    number = _json_u64(value)
    if number > _U32_MAX:
        raise DecodeError(f"integer {number} out of range for u32")
    return number


@dataclass(kw_only=True)
class PeerNetworkInfo:
    """Remote and local address of a peer connection."""

    remote_address: str
    local_address: str

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "PeerNetworkInfo")
        return cls(
            remote_address=_required(obj, "remoteAddress", _parse_str),
            local_address=_required(obj, "localAddress", _parse_str),
        )

    def to_json(self) -> dict[str, str]:
        return {"remoteAddress": self.remote_address, "localAddress": self.local_address}


@dataclass(kw_only=True)
class EthProtocolInfo:
    """Eth protocol version, difficulty and head of chain of a peer."""

    version: int
    difficulty: U256 | None = None
    head: str

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "EthProtocolInfo")
        return cls(
            version=_required(obj, "version", _json_u32),
            difficulty=_optional(obj, "difficulty", U256.from_json),
            head=_required(obj, "head", _parse_str),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "difficulty": _to_json_or_none(self.difficulty),
            "head": self.head,
        }


@dataclass(kw_only=True)
class PipProtocolInfo:
    """Pip protocol version, difficulty and head of chain of a peer."""

    version: int
    difficulty: U256
    head: str

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "PipProtocolInfo")
        return cls(
            version=_required(obj, "version", _json_u32),
            difficulty=_required(obj, "difficulty", U256.from_json),
            head=_required(obj, "head", _parse_str),
        )

    def to_json(self) -> dict[str, Any]:
        return {"version": self.version, "difficulty": self.difficulty.to_json(), "head": self.head}


@dataclass(kw_only=True)
class PeerProtocolsInfo:
    """The chain protocols a peer speaks."""

    eth: EthProtocolInfo | None = None
    pip: PipProtocolInfo | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "PeerProtocolsInfo")
        return cls(
            eth=_optional(obj, "eth", EthProtocolInfo.from_json),
            pip=_optional(obj, "pip", PipProtocolInfo.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"eth": _to_json_or_none(self.eth), "pip": _to_json_or_none(self.pip)}


@dataclass(kw_only=True)
class ParityPeerInfo:
    """Details of one peer."""

    id: str | None = None
    name: str
    caps: list[str] = field(default_factory=list)
    network: PeerNetworkInfo
    protocols: PeerProtocolsInfo

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "ParityPeerInfo")
        return cls(
            id=_optional(obj, "id", _parse_str),
            name=_required(obj, "name", _parse_str),
            caps=_required(obj, "caps", _list_of(_parse_str)),
            network=_required(obj, "network", PeerNetworkInfo.from_json),
            protocols=_required(obj, "protocols", PeerProtocolsInfo.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "caps": list(self.caps),
            "network": self.network.to_json(),
            "protocols": self.protocols.to_json(),
        }


@dataclass(kw_only=True)
class ParityPeerType:
    """Active, connected and maximum peer counts with the list of peers."""

    active: int
    connected: int
    max: int
    peers: list[ParityPeerInfo] = field(default_factory=list)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "ParityPeerType")
        return cls(
            active=_required(obj, "active", _json_u64),
            connected=_required(obj, "connected", _json_u64),
            max=_required(obj, "max", _json_u32),
            peers=_required(obj, "peers", _list_of(ParityPeerInfo.from_json)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "connected": self.connected,
            "max": self.max,
            "peers": [peer.to_json() for peer in self.peers],
        }


class _ConditionKind(enum.Enum):
    LOWER_THAN = "lt"
    EQUAL = "eq"
    GREATER_THAN = "gt"


@dataclass(frozen=True)
class FilterCondition:
    """A comparison against a value: lower than, equal to or greater than."""

    kind: _ConditionKind
    value: Any

    @classmethod
    def lower_than(cls, value):
        return cls(_ConditionKind.LOWER_THAN, value)

    @classmethod
    def equal(cls, value):
        return cls(_ConditionKind.EQUAL, value)

    @classmethod
    def greater_than(cls, value):
        return cls(_ConditionKind.GREATER_THAN, value)

    def to_json(self) -> dict[str, Any]:
        return {self.kind.value: self.value.to_json()}


@dataclass(frozen=True)
class ToFilter:
    """Match the recipient address, or match contract creation."""

    recipient: H160 | None = None

    @classmethod
    def address(cls, address):
        """Match this recipient address."""
        return cls(address)

    @classmethod
    def action(cls):
        """Match contract creation."""
        return cls(None)

    @property
    def is_action(self) -> bool:
        return self.recipient is None

    def to_json(self) -> dict[str, str]:
        if self.recipient is None:
            return {"action": "contract_creation"}
        return {"eq": self.recipient.to_json()}


def _coerce(value: Any, kind: type) -> Any:
    return value if isinstance(value, kind) else kind(value)


def _condition(value: Any, kind: type) -> FilterCondition:
    """A plain value means equality; a condition's value is brought to the given type."""
    if isinstance(value, FilterCondition):
        return FilterCondition(value.kind, _coerce(value.value, kind))
    return FilterCondition.equal(_coerce(value, kind))


@dataclass(frozen=True)
class ParityPendingTransactionFilter:
    """A filter for pending transactions; build it with its builder."""

    sender: FilterCondition | None = None
    to: ToFilter | None = None
    gas: FilterCondition | None = None
    gas_price: FilterCondition | None = None
    value: FilterCondition | None = None
    nonce: FilterCondition | None = None

    @classmethod
    def builder(cls):
        return ParityPendingTransactionFilterBuilder()

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, item in (
            ("from", self.sender),
            ("to", self.to),
            ("gas", self.gas),
            ("gas_price", self.gas_price),
            ("value", self.value),
            ("nonce", self.nonce),
        ):
            if item is not None:
                out[key] = item.to_json()
        return out


@dataclass(frozen=True)
class ParityPendingTransactionFilterBuilder:
    """Builds a ParityPendingTransactionFilter; each setter returns a new builder."""

    state: ParityPendingTransactionFilter = field(default_factory=ParityPendingTransactionFilter)

    def _with(self, **changes: Any) -> ParityPendingTransactionFilterBuilder:
        return ParityPendingTransactionFilterBuilder(replace(self.state, **changes))

    def sender(self, address):
        """Match transactions sent from this address."""
        return self._with(sender=FilterCondition.equal(address))

    def to(self, to_or_action):
        return self._with(to=to_or_action)

    def gas(self, gas):
        return self._with(gas=_condition(gas, U64))

    def gas_price(self, gas_price):
        return self._with(gas_price=_condition(gas_price, U64))

    def value(self, value):
        return self._with(value=_condition(value, U256))

    def nonce(self, nonce):
        return self._with(nonce=_condition(nonce, U256))

    def build(self) -> ParityPendingTransactionFilter:
        return self.state