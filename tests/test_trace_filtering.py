import pytest

from web3types.block import BlockNumber
from web3types.primitives import H160, H256, U256, Bytes, DecodeError
from web3types.trace_filtering import (
    ActionType,
    Call,
    CallResult,
    CallType,
    Create,
    CreateResult,
    Reward,
    RewardType,
    Suicide,
    Trace,
    TraceFilter,
    TraceFilterBuilder,
    action_to_json,
    parse_action,
    parse_result,
    result_to_json,
)

CALL_INPUT = (
    "0xb9f256cd000000000000000000000000fb6916095ca1df60bb79ce92ce3ea74c37c5d359"
    "0000000000000000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000080"
    "00000000000000000000000000000000000000000000000000000000000001a0"
    "00000000000000000000000000000000000000000000000000000000000000e8"
    "5468697320697320746865206f6666696369616c20457468657265756d20466f"
    "756e646174696f6e20546970204a61722e20466f722065766572792061626f76"
    "652061206365727461696e2076616c756520646f6e6174696f6e207765276c6c"
    "2063726561746520616e642073656e6420746f20796f752061206272616e6420"
    "6e657720556e69636f726e20546f6b656e2028f09fa684292e20436865636b20"
    "74686520756e69636f726e2070726963652062656c6f77202831206574686572"
    "203d20313030302066696e6e6579292e205468616e6b7320666f722074686520"
    "737570706f727421000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000"
)

SENDER = "0xd1220a0cf47c7b9be7a2e6ba89f429762e7b9adb"
RECIPIENT = "0xfb6916095ca1df60bb79ce92ce3ea74c37c5d359"
BLOCK_HASH = "0x6474a53a9ebf72d306a1406ec12ded12e210b6c3141b4373bfb3a3cea987dfb8"
TX_HASH = "0x342c284238149db221f9d87db87f90ffad7ac0aac57c0c480142f4c21b63f652"
ZERO_WORD = "0x" + "00" * 32


def _trace(action, action_type):
    return {
        "action": action,
        "blockHash": BLOCK_HASH,
        "blockNumber": 988775,
        "result": {"gasUsed": "0x4b419", "output": ZERO_WORD},
        "subtraces": 1,
        "traceAddress": [],
        "transactionHash": TX_HASH,
        "transactionPosition": 1,
        "type": action_type,
    }


EXAMPLE_TRACE_CALL = _trace(
    {
        "callType": "call",
        "from": SENDER,
        "gas": "0x63ab9",
        "input": CALL_INPUT,
        "to": RECIPIENT,
        "value": "0x0",
    },
    "call",
)

EXAMPLE_TRACE_CREATE = _trace(
    {"from": SENDER, "gas": "0x63ab9", "init": CALL_INPUT, "value": "0x0"},
    "create",
)

EXAMPLE_TRACE_SUICIDE = _trace(
    {"address": SENDER, "refundAddress": RECIPIENT, "balance": "0x0"},
    "suicide",
)

EXAMPLE_TRACE_REWARD = _trace(
    {"author": SENDER, "value": "0x0", "rewardType": "block"},
    "reward",
)


def test_deserialize_call_trace():
    trace = Trace.from_json(EXAMPLE_TRACE_CALL)
    assert trace.action == Call(
        sender=H160.from_hex(SENDER),
        to=H160.from_hex(RECIPIENT),
        value=U256(0),
        gas=U256(0x63AB9),
        input=Bytes.from_hex(CALL_INPUT),
        call_type=CallType.CALL,
    )
    assert trace.result == CallResult(gas_used=U256(0x4B419), output=Bytes(bytes(32)))
    assert trace.action_type is ActionType.CALL
    assert trace.block_number == 988775
    assert trace.block_hash == H256.from_hex(BLOCK_HASH)
    assert trace.transaction_hash == H256.from_hex(TX_HASH)
    assert trace.transaction_position == 1
    assert trace.subtraces == 1
    assert trace.trace_address == []
    assert trace.error is None


def test_deserialize_create_trace():
    trace = Trace.from_json(EXAMPLE_TRACE_CREATE)
    assert trace.action == Create(
        sender=H160.from_hex(SENDER),
        value=U256(0),
        gas=U256(0x63AB9),
        init=Bytes.from_hex(CALL_INPUT),
    )
    assert trace.action_type is ActionType.CREATE


def test_deserialize_suicide_trace():
    trace = Trace.from_json(EXAMPLE_TRACE_SUICIDE)
    assert trace.action == Suicide(
        address=H160.from_hex(SENDER),
        refund_address=H160.from_hex(RECIPIENT),
        balance=U256(0),
    )
    assert trace.action_type is ActionType.SUICIDE


def test_deserialize_reward_trace():
    trace = Trace.from_json(EXAMPLE_TRACE_REWARD)
    assert trace.action == Reward(
        author=H160.from_hex(SENDER), value=U256(0), reward_type=RewardType.BLOCK
    )
    assert trace.action_type is ActionType.REWARD


@pytest.mark.parametrize(
    "example",
    [EXAMPLE_TRACE_CALL, EXAMPLE_TRACE_CREATE, EXAMPLE_TRACE_SUICIDE, EXAMPLE_TRACE_REWARD],
)
def test_trace_round_trip(example):
    trace = Trace.from_json(example)
    assert Trace.from_json(trace.to_json()) == trace
    assert trace.to_json()["action"] == example["action"]


def test_trace_with_null_result_and_error():
    data = dict(EXAMPLE_TRACE_CALL, result=None, error="Reverted")
    trace = Trace.from_json(data)
    assert trace.result is None
    assert trace.error == "Reverted"
    assert trace.to_json()["result"] is None


def test_trace_missing_field_is_rejected():
    data = dict(EXAMPLE_TRACE_CALL)
    del data["blockHash"]
    with pytest.raises(DecodeError):
        Trace.from_json(data)


def test_parse_result_prefers_call_result():
    result = parse_result({"gasUsed": "0x1", "output": "0x"})
    assert result == CallResult(gas_used=U256(1), output=Bytes())


def test_parse_result_create_result():
    data = {"gasUsed": "0x2", "code": "0x6060", "address": RECIPIENT}
    result = parse_result(data)
    assert result == CreateResult(
        gas_used=U256(2), code=Bytes(b"\x60\x60"), address=H160.from_hex(RECIPIENT)
    )
    assert result_to_json(result) == data


def test_parse_result_null_and_invalid():
    assert parse_result(None) is None
    with pytest.raises(DecodeError):
        parse_result({})


def test_parse_action_unknown_call_type_is_rejected():
    data = dict(EXAMPLE_TRACE_CALL["action"], callType="bogus")
    with pytest.raises(DecodeError):
        parse_action(data)


def test_parse_action_unknown_reward_type_is_rejected():
    with pytest.raises(DecodeError):
        parse_action({"author": SENDER, "value": "0x0", "rewardType": "bogus"})


def test_action_to_json_reward():
    reward = Reward(author=H160.from_low_u64_be(1), value=U256(16), reward_type=RewardType.EMPTY_STEP)
    assert action_to_json(reward) == {
        "author": "0x0000000000000000000000000000000000000001",
        "value": "0x10",
        "rewardType": "emptyStep",
    }


def test_action_to_json_rejects_other_types():
    with pytest.raises(TypeError):
        action_to_json("call")


def test_empty_filter_serializes_to_empty_object():
    assert TraceFilterBuilder().build().to_json() == {}
    assert TraceFilter().to_json() == {}


def test_filter_builder_sets_all_fields():
    trace_filter = (
        TraceFilterBuilder()
        .from_block(BlockNumber.of(1))
        .to_block(BlockNumber.latest())
        .from_address([H160.from_low_u64_be(1)])
        .to_address([H160.from_low_u64_be(2), H160.from_low_u64_be(3)])
        .after(3)
        .count(10)
        .build()
    )
    assert trace_filter.to_json() == {
        "fromBlock": "0x1",
        "toBlock": "latest",
        "fromAddress": ["0x0000000000000000000000000000000000000001"],
        "toAddress": [
            "0x0000000000000000000000000000000000000002",
            "0x0000000000000000000000000000000000000003",
        ],
        "after": 3,
        "count": 10,
    }


def test_filter_builder_is_not_mutated():
    base = TraceFilterBuilder()
    base.count(5)
    assert base.build() == TraceFilter()


@pytest.mark.parametrize("setter", ["after", "count"])
def test_filter_builder_rejects_negative_numbers(setter):
    with pytest.raises(ValueError):
        getattr(TraceFilterBuilder(), setter)(-1)