"""The state of blockchain syncing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from web3types.primitives import U256, DecodeError, _object, _optional, _required


def _parse_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"expected a boolean, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class SyncInfo:
    """Progress of a running sync."""

    starting_block: U256
    current_block: U256
    highest_block: U256

    @classmethod
    def from_json(cls, data):
        obj = _object(data, "SyncInfo")
        return cls(
            starting_block=_required(obj, "startingBlock", U256.from_json),
            current_block=_required(obj, "currentBlock", U256.from_json),
            highest_block=_required(obj, "highestBlock", U256.from_json),
        )

    @classmethod
    def _from_subscription(cls, data: Any) -> SyncInfo:
        obj = _object(data, "SyncInfo")
        return cls(
            starting_block=_required(obj, "StartingBlock", U256.from_json),
            current_block=_required(obj, "CurrentBlock", U256.from_json),
            highest_block=_required(obj, "HighestBlock", U256.from_json),
        )

    def to_json(self) -> dict[str, str]:
        return {
            "startingBlock": self.starting_block.to_json(),
            "currentBlock": self.current_block.to_json(),
            "highestBlock": self.highest_block.to_json(),
        }


def _parse_subscription(data: Any) -> tuple[bool, SyncInfo | None] | None:
    if not isinstance(data, Mapping):
        return None
    try:
        syncing = _required(data, "syncing", _parse_bool)
        status = _optional(data, "status", SyncInfo._from_subscription)
    except DecodeError:
        return None
    return syncing, status


@dataclass(frozen=True)
class SyncState:
    """Syncing with the given progress, or not syncing when info is None."""

    info: SyncInfo | None = None

    @property
    def is_syncing(self) -> bool:
        return self.info is not None

    @classmethod
    def not_syncing(cls):
        return cls(None)

    @classmethod
    def from_json(cls, data):
        """Decode a sync info object, a subscription status object, or false."""
        try:
            return cls(SyncInfo.from_json(data))
        except DecodeError:
            pass
        subscription = _parse_subscription(data)
        if subscription is not None:
            syncing, status = subscription
            if not syncing and status is None:
                return cls.not_syncing()
            if syncing and status is not None:
                return cls(status)
            raise DecodeError("expected object or `syncing = false`, got `syncing = true`")
        if isinstance(data, bool):
            if not data:
                return cls.not_syncing()
            raise DecodeError("expected object or `false`, got `true`")
        raise DecodeError("data did not match any variant of SyncState")

    def to_json(self) -> Any:
        if self.info is None:
            return False
        return self.info.to_json()