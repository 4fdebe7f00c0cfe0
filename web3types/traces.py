"""Types for the ad-hoc trace API: transaction traces, VM traces and state diffs."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

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
from web3types.trace_filtering import (
    Action,
    ActionType,
    Res,
    _parse_action_type,
    _parse_str,
    action_to_json,
    parse_action,
    parse_result,
    result_to_json,
)

T = TypeVar("T")


class TraceType(str, enum.Enum):
    """The kind of trace to make."""

    TRACE = "trace"
    VM_TRACE = "vmTrace"
    STATE_DIFF = "stateDiff"


def trace_types_to_json(trace_types: Iterable[TraceType]) -> list[str]:
    """Encode a sequence of trace types as a JSON array of names."""
    return [TraceType(trace_type).value for trace_type in trace_types]


@dataclass(frozen=True)
class ChangedType(Generic[T]):
    """A value that changed from `before` to `after`."""

    before: T
    after: T


@dataclass(frozen=True)
class Diff(Generic[T]):
    """A change to a value: same, born, died or changed."""

    SAME: ClassVar[str] = "="
    BORN: ClassVar[str] = "+"
    DIED: ClassVar[str] = "-"
    CHANGED: ClassVar[str] = "*"

    kind: str
    value: Any = None

    def __post_init__(self) -> None:
        if self.kind == self.SAME:
            if self.value is not None:
                raise ValueError("an unchanged diff carries no value")
        elif self.kind == self.CHANGED:
            if not isinstance(self.value, ChangedType):
                raise TypeError("a changed diff needs a ChangedType value")
        elif self.kind not in (self.BORN, self.DIED):
            raise ValueError(f"unknown diff kind {self.kind!r}")

    @classmethod
    def from_json(cls, data, parse_value):
        """Decode "=" or a one-key object tagged "+", "-" or "*"."""
        if data == cls.SAME:
            return cls(cls.SAME)
        obj = _object(data, "Diff")
        if len(obj) != 1:
            raise DecodeError(f"expected an object with exactly one key for Diff, got {len(obj)}")
        ((tag, value),) = obj.items()
        if tag in (cls.BORN, cls.DIED):
            return cls(tag, parse_value(value))
        if tag == cls.CHANGED:
            change = _object(value, "ChangedType")
            return cls(
                cls.CHANGED,
                ChangedType(
                    _required(change, "from", parse_value),
                    _required(change, "to", parse_value),
                ),
            )
        raise DecodeError(f"unknown variant `{tag}` for Diff")

    def to_json(self) -> Any:
        if self.kind == self.SAME:
            return self.SAME
        if self.kind == self.CHANGED:
            return {
                self.CHANGED: {
                    "from": self.value.before.to_json(),
                    "to": self.value.after.to_json(),
                }
            }
        return {self.kind: self.value.to_json()}


def _diff_parser(parse_value: Callable[[Any], Any]) -> Callable[[Any], Diff]:
    return lambda data: Diff.from_json(data, parse_value)


def _parse_storage(data: Any) -> dict[H256, Diff]:
    obj = _object(data, "storage")
    return {H256.from_json(key): Diff.from_json(value, H256.from_json) for key, value in obj.items()}


@dataclass(kw_only=True)
class AccountDiff:
    """Changes to an account's balance, nonce, code and storage."""

    balance: Diff
    nonce: Diff
    code: Diff
    storage: dict[H256, Diff] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "AccountDiff")
        return cls(
            balance=_required(obj, "balance", _diff_parser(U256.from_json)),
            nonce=_required(obj, "nonce", _diff_parser(U256.from_json)),
            code=_required(obj, "code", _diff_parser(Bytes.from_json)),
            storage=_required(obj, "storage", _parse_storage),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "balance": self.balance.to_json(),
            "nonce": self.nonce.to_json(),
            "code": self.code.to_json(),
            "storage": {key.to_json(): self.storage[key].to_json() for key in sorted(self.storage)},
        }


@dataclass
class StateDiff:
    """Account diffs keyed by address."""

    accounts: dict[H160, AccountDiff] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "StateDiff")
        return cls({H160.from_json(key): AccountDiff.from_json(value) for key, value in obj.items()})

    def to_json(self) -> dict[str, Any]:
        return {key.to_json(): self.accounts[key].to_json() for key in sorted(self.accounts)}


@dataclass(kw_only=True)
class TransactionTrace:
    """One trace entry of a transaction."""

    trace_address: list[int]
    subtraces: int
    action: Action
    action_type: ActionType
    result: Res | None = None
    error: str | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "TransactionTrace")
        return cls(
            trace_address=_required(obj, "traceAddress", _list_of(_json_u64)),
            subtraces=_required(obj, "subtraces", _json_u64),
            action=_required(obj, "action", parse_action),
            action_type=_required(obj, "type", _parse_action_type),
            result=_optional(obj, "result", parse_result),
            error=_optional(obj, "error", _parse_str),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "traceAddress": list(self.trace_address),
            "subtraces": self.subtraces,
            "action": action_to_json(self.action),
            "type": self.action_type.value,
            "result": result_to_json(self.result),
            "error": self.error,
        }


@dataclass(kw_only=True)
class MemoryDiff:
    """A changed chunk of memory."""

    off: int = 0
    data: Bytes = field(default_factory=Bytes)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "MemoryDiff")
        return cls(
            off=_required(obj, "off", _json_u64),
            data=_required(obj, "data", Bytes.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"off": self.off, "data": self.data.to_json()}


@dataclass(kw_only=True)
class StorageDiff:
    """A changed storage value."""

    key: U256 = field(default_factory=U256)
    val: U256 = field(default_factory=U256)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "StorageDiff")
        return cls(
            key=_required(obj, "key", U256.from_json),
            val=_required(obj, "val", U256.from_json),
        )

    def to_json(self) -> dict[str, str]:
        return {"key": self.key.to_json(), "val": self.val.to_json()}


@dataclass(kw_only=True)
class VMExecutedOperation:
    """The effects of an executed VM operation."""

    used: int = 0
    push: list[U256] = field(default_factory=list)
    mem: MemoryDiff | None = None
    store: StorageDiff | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "VMExecutedOperation")
        return cls(
            used=_required(obj, "used", _json_u64),
            push=_required(obj, "push", _list_of(U256.from_json)),
            mem=_optional(obj, "mem", MemoryDiff.from_json),
            store=_optional(obj, "store", StorageDiff.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "used": self.used,
            "push": [item.to_json() for item in self.push],
            "mem": _to_json_or_none(self.mem),
            "store": _to_json_or_none(self.store),
        }


@dataclass(kw_only=True)
class VMOperation:
    """A single executed VM operation."""

    pc: int = 0
    cost: int = 0
    ex: VMExecutedOperation | None = None
    sub: VMTrace | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "VMOperation")
        return cls(
            pc=_required(obj, "pc", _json_u64),
            cost=_required(obj, "cost", _json_u64),
            ex=_optional(obj, "ex", VMExecutedOperation.from_json),
            sub=_optional(obj, "sub", VMTrace.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "pc": self.pc,
            "cost": self.cost,
            "ex": _to_json_or_none(self.ex),
            "sub": _to_json_or_none(self.sub),
        }


@dataclass(kw_only=True)
class VMTrace:
    """A full VM trace of a call or create: its code and executed operations."""

    code: Bytes = field(default_factory=Bytes)
    ops: list[VMOperation] = field(default_factory=list)

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "VMTrace")
        return cls(
            code=_required(obj, "code", Bytes.from_json),
            ops=_required(obj, "ops", _list_of(VMOperation.from_json)),
        )

    def to_json(self) -> dict[str, Any]:
        return {"code": self.code.to_json(), "ops": [op.to_json() for op in self.ops]}


@dataclass(kw_only=True)
class BlockTrace:
    """The result of an ad-hoc trace of a transaction."""

    output: Bytes
    trace: list[TransactionTrace] | None = None
    vm_trace: VMTrace | None = None
    state_diff: StateDiff | None = None
    transaction_hash: H256 | None = None

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "BlockTrace")
        return cls(
            output=_required(obj, "output", Bytes.from_json),
            trace=_optional(obj, "trace", _list_of(TransactionTrace.from_json)),
            vm_trace=_optional(obj, "vmTrace", VMTrace.from_json),
            state_diff=_optional(obj, "stateDiff", StateDiff.from_json),
            transaction_hash=_optional(obj, "transactionHash", H256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "output": self.output.to_json(),
            "trace": None if self.trace is None else [item.to_json() for item in self.trace],
            "vmTrace": _to_json_or_none(self.vm_trace),
            "stateDiff": _to_json_or_none(self.state_diff),
            "transactionHash": _to_json_or_none(self.transaction_hash),
        }