"""Ways to identify a transaction."""

from __future__ import annotations

from dataclasses import dataclass

from web3types.block import BlockId
from web3types.primitives import H256, Index


@dataclass(frozen=True)
class TransactionId:
    """A transaction identified by hash, or by block and index within it."""

    hash: H256 | None = None
    block: BlockId | None = None
    index: Index | None = None

    def __post_init__(self) -> None:
        if self.hash is not None:
            if self.block is not None or self.index is not None:
                raise ValueError("a transaction id takes a hash or a block and index, not both")
            if not isinstance(self.hash, H256):
                raise TypeError("a transaction hash must be an H256")
            return
        if self.block is None or self.index is None:
            raise ValueError("a transaction id needs a hash or both a block and an index")
        if not isinstance(self.block, BlockId):
            raise TypeError("a block must be a BlockId")
        object.__setattr__(self, "index", Index(self.index))

    @classmethod
    def from_hash(cls, tx_hash):
        return cls(hash=tx_hash)

    @classmethod
    def from_block(cls, block, index):
        """Identify by block (BlockId, block hash, BlockNumber or integer) and index."""
        if isinstance(block, H256):
            block = BlockId.from_hash(block)
        elif not isinstance(block, BlockId):
            block = BlockId.from_number(block)
        return cls(block=block, index=index)