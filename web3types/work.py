"""A miner's work package."""

from __future__ import annotations

from dataclasses import dataclass

from web3types.primitives import H256, U256, DecodeError, _json_u64

_U64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class Work:
    """Proof-of-work hash, seed hash, target and an optional block number."""

    pow_hash: H256
    seed_hash: H256
    target: H256
    number: int | None = None

    def __post_init__(self) -> None:
        if self.number is not None and not 0 <= self.number <= _U64_MAX:
            raise ValueError(f"block number {self.number} out of range for u64")

    @classmethod
    def from_json(cls, data):
        """Decode a JSON array of three hashes, optionally followed by an integer number."""
        if not isinstance(data, list) or len(data) not in (3, 4):
            raise DecodeError(f"Cannot deserialize Work: expected an array of 3 or 4 items, got {data!r}")
        try:
            pow_hash, seed_hash, target = (H256.from_json(item) for item in data[:3])
            number = _json_u64(data[3]) if len(data) == 4 else None
        except DecodeError as error:
            raise DecodeError(f"Cannot deserialize Work: {error}") from error
        return cls(pow_hash, seed_hash, target, number)

    def to_json(self) -> list[str]:
        items = [self.pow_hash.to_json(), self.seed_hash.to_json(), self.target.to_json()]
        if self.number is not None:
            items.append(U256(self.number).to_json())
        return items