"""Trace filters and the traces returned by the trace-filtering API."""

from __future__ import annotations

import enum
import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Union

from web3types.block import BlockNumber
from web3types.primitives import (
    H160,
    H256,
    U256,
    Bytes,
    DecodeError,
    _json_u64,
    _list_of,
    _object,
    _optional,
    _required,
    _to_json_or_none,
)


class ActionType(str, enum.Enum):
    """The kind of an external action."""

    CALL = "call"
    CREATE = "create"
    SUICIDE = "suicide"
    REWARD = "reward"


class CallType(str, enum.Enum):
    """The kind of a contract call."""

    NONE = "none"
    CALL = "call"
    CALL_CODE = "callcode"
    DELEGATE_CALL = "delegatecall"
    STATIC_CALL = "staticcall"


class RewardType(str, enum.Enum):
    """The kind of a reward."""

    BLOCK = "block"
    UNCLE = "uncle"
    EMPTY_STEP = "emptyStep"
    EXTERNAL = "external"


def _enum_parser(enum_cls: type[enum.Enum]) -> Callable[[Any], Any]:
    def parse(value: Any) -> Any:
        if not isinstance(value, str):
            raise DecodeError(f"expected a string for {enum_cls.__name__}, got {value!r}")
        try:
            return enum_cls(value)
        except ValueError:
            raise DecodeError(f"unknown variant `{value}` for {enum_cls.__name__}") from None

    return parse


_parse_action_type = _enum_parser(ActionType)
_parse_call_type = _enum_parser(CallType)
_parse_reward_type = _enum_parser(RewardType)


def _parse_str(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {type(value).__name__}")
    return value


def _non_negative(value: Any, what: str) -> int:
    number = operator.index(value)
    if number < 0:
        raise ValueError(f"{what} must not be negative, got {number}")
    return number


def _first_match(data: Any, parsers: Iterable[Callable[[Any], Any]], what: str) -> Any:
    for parse in parsers:
        try:
            return parse(data)
        except DecodeError:
            continue
    raise DecodeError(f"data did not match any variant of {what}")


@dataclass(kw_only=True)
class CallResult:
    """The result of a call: gas used and output bytes."""

    gas_used: U256 = field(default_factory=U256)
    output: Bytes = field(default_factory=Bytes)


@dataclass(kw_only=True)
class CreateResult:
    """The result of a contract creation."""

    gas_used: U256 = field(default_factory=U256)
    code: Bytes = field(default_factory=Bytes)
    address: H160 = field(default_factory=H160.zero)


@dataclass(kw_only=True)
class Call:
    """A call action."""

    sender: H160 = field(default_factory=H160.zero)
    to: H160 = field(default_factory=H160.zero)
    value: U256 = field(default_factory=U256)
    gas: U256 = field(default_factory=U256)
    input: Bytes = field(default_factory=Bytes)
    call_type: CallType = CallType.NONE


@dataclass(kw_only=True)
class Create:
    """A contract creation action."""

    sender: H160 = field(default_factory=H160.zero)
    value: U256 = field(default_factory=U256)
    gas: U256 = field(default_factory=U256)
    init: Bytes = field(default_factory=Bytes)


@dataclass(kw_only=True)
class Suicide:
    """A contract self-destruct action."""

    address: H160 = field(default_factory=H160.zero)
    refund_address: H160 = field(default_factory=H160.zero)
    balance: U256 = field(default_factory=U256)


@dataclass(kw_only=True)
class Reward:
    """A reward action."""

    author: H160
    value: U256
    reward_type: RewardType


Action = Union[Call, Create, Suicide, Reward]
Res = Union[CallResult, CreateResult]


def _parse_call(data: Any) -> Call:
    obj = _object(data, "Call")
    return Call(
        sender=_required(obj, "from", H160.from_json),
        to=_required(obj, "to", H160.from_json),
        value=_required(obj, "value", U256.from_json),
        gas=_required(obj, "gas", U256.from_json),
        input=_required(obj, "input", Bytes.from_json),
        call_type=_required(obj, "callType", _parse_call_type),
    )


def _parse_create(data: Any) -> Create:
    obj = _object(data, "Create")
    return Create(
        sender=_required(obj, "from", H160.from_json),
        value=_required(obj, "value", U256.from_json),
        gas=_required(obj, "gas", U256.from_json),
        init=_required(obj, "init", Bytes.from_json),
    )


def _parse_suicide(data: Any) -> Suicide:
    obj = _object(data, "Suicide")
    return Suicide(
        address=_required(obj, "address", H160.from_json),
        refund_address=_required(obj, "refundAddress", H160.from_json),
        balance=_required(obj, "balance", U256.from_json),
    )


def _parse_reward(data: Any) -> Reward:
    obj = _object(data, "Reward")
    return Reward(
        author=_required(obj, "author", H160.from_json),
        value=_required(obj, "value", U256.from_json),
        reward_type=_required(obj, "rewardType", _parse_reward_type),
    )


def _parse_call_result(data: Any) -> CallResult:
    obj = _object(data, "CallResult")
    return CallResult(
        gas_used=_required(obj, "gasUsed", U256.from_json),
        output=_required(obj, "output", Bytes.from_json),
    )


def _parse_create_result(data: Any) -> CreateResult:
    obj = _object(data, "CreateResult")
    return CreateResult(
        gas_used=_required(obj, "gasUsed", U256.from_json),
        code=_required(obj, "code", Bytes.from_json),
        address=_required(obj, "address", H160.from_json),
    )


def parse_action(data):
    """Decode an action, trying call, create, suicide and reward in that order."""
    return _first_match(data, (_parse_call, _parse_create, _parse_suicide, _parse_reward), "Action")


def action_to_json(action) -> dict[str, Any]:
    """Encode an action as the JSON object of its kind."""
    if isinstance(action, Call):
        return {
            "from": action.sender.to_json(),
            "to": action.to.to_json(),
            "value": action.value.to_json(),
            "gas": action.gas.to_json(),
            "input": action.input.to_json(),
            "callType": action.call_type.value,
        }
    if isinstance(action, Create):
        return {
            "from": action.sender.to_json(),
            "value": action.value.to_json(),
            "gas": action.gas.to_json(),
            "init": action.init.to_json(),
        }
    if isinstance(action, Suicide):
        return {
            "address": action.address.to_json(),
            "refundAddress": action.refund_address.to_json(),
            "balance": action.balance.to_json(),
        }
    if isinstance(action, Reward):
        return {
            "author": action.author.to_json(),
            "value": action.value.to_json(),
            "rewardType": action.reward_type.value,
        }
    raise TypeError(f"not an action: {type(action).__name__}")


def parse_result(data):
    """Decode a trace result: null, a call result or a create result."""
    if data is None:
        return None
    return _first_match(data, (_parse_call_result, _parse_create_result), "Res")


def result_to_json(result) -> dict[str, Any] | None:
    """Encode a trace result; None is written as null."""
    if result is None:
        return None
    if isinstance(result, CallResult):
        return {"gasUsed": result.gas_used.to_json(), "output": result.output.to_json()}
    if isinstance(result, CreateResult):
        return {
            "gasUsed": result.gas_used.to_json(),
            "code": result.code.to_json(),
            "address": result.address.to_json(),
        }
    raise TypeError(f"not a trace result: {type(result).__name__}")


@dataclass(frozen=True)
class TraceFilter:
    """A trace filter; build it with TraceFilterBuilder."""

    from_block: BlockNumber | None = None
    to_block: BlockNumber | None = None
    from_address: tuple[H160, ...] | None = None
    to_address: tuple[H160, ...] | None = None
    after: int | None = None
    count: int | None = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.from_block is not None:
            out["fromBlock"] = self.from_block.to_json()
        if self.to_block is not None:
            out["toBlock"] = self.to_block.to_json()
        if self.from_address is not None:
            out["fromAddress"] = [address.to_json() for address in self.from_address]
        if self.to_address is not None:
            out["toAddress"] = [address.to_json() for address in self.to_address]
        if self.after is not None:
            out["after"] = self.after
        if self.count is not None:
            out["count"] = self.count
        return out


@dataclass(frozen=True)
class TraceFilterBuilder:
    """Builds a TraceFilter; each setter returns a new builder."""

    state: TraceFilter = field(default_factory=TraceFilter)

    def from_block(self, block):
        return TraceFilterBuilder(replace(self.state, from_block=block))

    def to_block(self, block):
        return TraceFilterBuilder(replace(self.state, to_block=block))

    def to_address(self, addresses):
        return TraceFilterBuilder(replace(self.state, to_address=tuple(addresses)))

    def from_address(self, addresses):
        return TraceFilterBuilder(replace(self.state, from_address=tuple(addresses)))

    def after(self, after):
        """Set the offset into the output."""
        return TraceFilterBuilder(replace(self.state, after=_non_negative(after, "after")))

    def count(self, count):
        """Set the number of traces to return."""
        return TraceFilterBuilder(replace(self.state, count=_non_negative(count, "count")))

    def build(self) -> TraceFilter:
        return self.state


@dataclass(kw_only=True)
class Trace:
    """A trace returned by the trace-filtering API."""

    action: Action
    result: Res | None = None
    trace_address: list[int] = field(default_factory=list)
    subtraces: int = 0
    transaction_position: int | None = None
    transaction_hash: H256 | None = None
    block_number: int = 0
    block_hash: H256 = field(default_factory=H256.zero)
    action_type: ActionType = ActionType.CALL
    error: str | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "Trace")
        return cls(
            action=_required(obj, "action", parse_action),
            result=_optional(obj, "result", parse_result),
            trace_address=_required(obj, "traceAddress", _list_of(_json_u64)),
            subtraces=_required(obj, "subtraces", _json_u64),
            transaction_position=_optional(obj, "transactionPosition", _json_u64),
            transaction_hash=_optional(obj, "transactionHash", H256.from_json),
            block_number=_required(obj, "blockNumber", _json_u64),
            block_hash=_required(obj, "blockHash", H256.from_json),
            action_type=_required(obj, "type", _parse_action_type),
            error=_optional(obj, "error", _parse_str),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "action": action_to_json(self.action),
            "result": result_to_json(self.result),
            "traceAddress": list(self.trace_address),
            "subtraces": self.subtraces,
            "transactionPosition": self.transaction_position,
            "transactionHash": _to_json_or_none(self.transaction_hash),
            "blockNumber": self.block_number,
            "blockHash": self.block_hash.to_json(),
            "type": self.action_type.value,
            "error": self.error,
        }