# web3types

Plain Python models for the data exchanged with Ethereum JSON-RPC nodes.
Each type reads the decoded JSON a node sends back (`from_json`) and produces
the JSON value a node expects (`to_json`). Both work on Python values as
returned by `json.loads` and accepted by `json.dumps`. The field names, hex
encodings and validation rules follow the protocol's. Malformed input raises
`web3types.primitives.DecodeError`, a subclass of `ValueError`.

The package has no dependencies outside the standard library.

## Installation

```
pip install web3types
```

## Modules

- `web3types.primitives`: fixed-size hashes `H64`, `H128`, `H160`, `H256`,
  `H512`, `H520` and `H2048` (all subclasses of `FixedHash`). The bounded
  unsigned integers `U64`, `U128` and `U256` are subclasses of `UInt`, which
  is an `int`. It also has `Bytes`, written as 0x-prefixed hex, and
  `BytesArray`, written as an array of numbers. `Address` is an alias of
  `H160` and `Index` an alias of `U64`.
- `web3types.block`: `Block` and `BlockHeader`. It also has `BlockNumber`,
  with the tags `latest`, `earliest` and `pending` or `BlockNumber.of(n)`.
  `BlockId` identifies a block by hash or by number. `Block.from_json`
  passes each transaction through an optional `transaction_parser`. Without
  one it keeps each transaction as it came.
- `web3types.transaction_id`: `TransactionId`, by hash or by block and index.
- `web3types.transaction`: `Transaction`, `Receipt`, `RawTransaction` and
  `AccessListItem`.
- `web3types.transaction_request`: `CallRequest`, `TransactionRequest` and
  `TransactionCondition`, which is valid from a block or from a unix time.
- `web3types.log`: `Log`, with `is_removed()`. It also has `Filter`, built
  with `FilterBuilder`, and `Topic` and `TopicFilter` for filtering on topic
  positions.
- `web3types.signed`: `SignedData`, `SignedTransaction` and
  `TransactionParameters`. The default gas of `TransactionParameters` is
  100000, and it converts to and from a `CallRequest`.
- `web3types.recovery`: `Recovery`, `RecoveryMessage` and
  `ParseSignatureError`.
- `web3types.sync_state`: `SyncInfo` and `SyncState`. `SyncState` reads
  either the `eth_syncing` answer or a subscription status object.
- `web3types.trace_filtering`: `TraceFilter` with `TraceFilterBuilder`, and
  `Trace`. The actions are `Call`, `Create`, `Suicide` and `Reward`. The
  results are `CallResult` and `CreateResult`. The enums are `ActionType`,
  `CallType` and `RewardType`. The helpers `parse_action`, `action_to_json`,
  `parse_result` and `result_to_json` convert actions and results.
- `web3types.traces`: the ad-hoc trace types `BlockTrace`,
  `TransactionTrace`, `VMTrace`, `VMOperation`, `VMExecutedOperation`,
  `MemoryDiff`, `StorageDiff`, `StateDiff`, `AccountDiff`, `Diff` and
  `ChangedType`. It also has `TraceType` and `trace_types_to_json`.
- `web3types.work`: `Work`, a miner's work package.
- `web3types.parity`: Parity/OpenEthereum peer information. This covers
  `ParityPeerType`, `ParityPeerInfo`, `PeerNetworkInfo`,
  `PeerProtocolsInfo`, `EthProtocolInfo` and `PipProtocolInfo`. It also has
  the pending-transaction filter types `FilterCondition`, `ToFilter`,
  `ParityPendingTransactionFilter` and
  `ParityPendingTransactionFilterBuilder`.

The builders are immutable. Each setter returns a new builder, and `build()`
returns the finished filter.

## Examples

Quantities and hashes:

```python
from web3types.primitives import U256, H160

U256.from_json("0x100")            # U256(256)
U256(16).to_json()                 # "0x10"
H160.from_low_u64_be(5).to_json()  # "0x0000000000000000000000000000000000000005"
```

Building a log filter:

```python
from web3types.block import BlockNumber
from web3types.log import FilterBuilder
from web3types.primitives import H160, H256

log_filter = (
    FilterBuilder()
    .from_block(BlockNumber.of(0x1B4))
    .to_block(BlockNumber.latest())
    .address([H160.from_low_u64_be(1)])
    .topics([H256.from_low_u64_be(3)], None, None, None)
    .build()
)
payload = log_filter.to_json()
# {"fromBlock": "0x1b4", "toBlock": "latest",
#  "address": "0x00...01", "topics": ["0x00...03"]}
```

Reading the sync status a node reports:

```python
from web3types.sync_state import SyncState

SyncState.from_json(False).is_syncing  # False
SyncState.from_json(
    {"startingBlock": "0x0", "currentBlock": "0x42", "highestBlock": "0x9001"}
).info.current_block                   # U256(66)
```

Splitting a raw 65-byte signature, laid out as r, then s, then v:

```python
from web3types.recovery import Recovery

raw_signature = bytes(32) + bytes(32) + bytes([28])
recovery = Recovery.from_raw_signature("Some data", raw_signature)
signature, recovery_id = recovery.as_signature()  # 64 bytes, 1
```

## What this package does not do

This package only describes data. It has no JSON-RPC client or transport
and does not talk to a node. It does no hashing or elliptic-curve work.
`Recovery` splits a signature into its parts and works out the recovery id.
It does not recover the signer's address, and nothing here signs
transactions.

## Running the tests

```
pip install -e ".[test]"
pytest
```