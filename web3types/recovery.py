"""Data for recovering the public address that signed a message."""

from __future__ import annotations

from dataclasses import dataclass

from web3types.primitives import H256
from web3types.signed import SignedData, SignedTransaction

_U64_MAX = (1 << 64) - 1
_SIGNATURE_LENGTH = 65


class ParseSignatureError(ValueError):
    """Raised when a raw signature does not have 65 bytes."""

    def __init__(self) -> None:
        super().__init__("error parsing raw signature: wrong number of bytes, expected 65")


@dataclass(frozen=True)
class RecoveryMessage:
    """Either message bytes, to be hashed before recovery, or a precomputed hash."""

    data: bytes | None = None
    hash: H256 | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.hash is None):
            raise ValueError("a recovery message needs exactly one of data or hash")
        if self.data is not None:
            object.__setattr__(self, "data", bytes(self.data))
        elif not isinstance(self.hash, H256):
            raise TypeError("a recovery hash must be an H256")

    @classmethod
    def of(cls, value):
        """Wrap bytes or text as message data, and an H256 as a hash."""
        if isinstance(value, RecoveryMessage):
            return value
        if isinstance(value, H256):
            return cls(hash=value)
        if isinstance(value, str):
            return cls(data=value.encode("utf-8"))
        if isinstance(value, (bytes, bytearray, memoryview, list)):
            return cls(data=bytes(value))
        raise TypeError(f"cannot make a recovery message from {type(value).__name__}")


@dataclass(frozen=True)
class Recovery:
    """A message with the v, r and s of its signature; v is in Electrum notation."""

    message: RecoveryMessage
    v: int
    r: H256
    s: H256

    def __post_init__(self) -> None:
        object.__setattr__(self, "message", RecoveryMessage.of(self.message))
        if not 0 <= self.v <= _U64_MAX:
            raise ValueError(f"v value {self.v} out of range for u64")

    @classmethod
    def from_raw_signature(cls, message, raw_signature):
        """Parse a 65-byte signature laid out as r, s, then v."""
        raw = bytes(raw_signature)
        if len(raw) != _SIGNATURE_LENGTH:
            raise ParseSignatureError()
        return cls(message, raw[64], H256(raw[:32]), H256(raw[32:64]))

    @classmethod
    def from_signed_data(cls, signed: SignedData):
        return cls(RecoveryMessage(hash=signed.message_hash), signed.v, signed.r, signed.s)

    @classmethod
    def from_signed_transaction(cls, tx: SignedTransaction):
        return cls(RecoveryMessage(hash=tx.message_hash), tx.v, tx.r, tx.s)

    def recovery_id(self) -> int | None:
        """The standard recovery id, or None if v is not valid."""
        if self.v == 27:
            return 0
        if self.v == 28:
            return 1
        if self.v >= 35:
            return (self.v - 1) % 2
        return None

    def as_signature(self) -> tuple[bytes, int] | None:
        """The 64-byte compact signature and the recovery id, or None if v is not valid."""
        recovery_id = self.recovery_id()
        if recovery_id is None:
            return None
        return self.r.data + self.s.data, recovery_id