import json

import pytest

from web3types.primitives import H160, H256, U256, Bytes, DecodeError
from web3types.transaction import AccessListItem
from web3types.transaction_request import (
    CallRequest,
    TransactionCondition,
    TransactionRequest,
)

CALL_REQUEST_JSON = """{
  "to": "0x0000000000000000000000000000000000000005",
  "gas": "0x5208",
  "value": "0x4c4b40",
  "data": "0x010203"
}"""

TRANSACTION_REQUEST_JSON = """{
  "from": "0x0000000000000000000000000000000000000005",
  "gas": "0x5208",
  "value": "0x4c4b40",
  "data": "0x010203",
  "condition": {
    "block": 5
  }
}"""


def test_should_serialize_call_request():
    request = CallRequest(
        to=H160.from_low_u64_be(5),
        gas=U256(21_000),
        value=U256(5_000_000),
        data=Bytes(bytes.fromhex("010203")),
    )
    assert json.dumps(request.to_json(), indent=2) == CALL_REQUEST_JSON


def test_should_deserialize_call_request():
    request = CallRequest.from_json(json.loads(CALL_REQUEST_JSON))
    assert request.sender is None
    assert request.to == H160.from_low_u64_be(5)
    assert request.gas == 21_000
    assert request.gas_price is None
    assert request.value == 5_000_000
    assert request.data == Bytes(bytes.fromhex("010203"))


def test_should_serialize_transaction_request():
    request = TransactionRequest(
        sender=H160.from_low_u64_be(5),
        gas=U256(21_000),
        value=U256(5_000_000),
        data=Bytes(bytes.fromhex("010203")),
        condition=TransactionCondition.block(5),
    )
    assert json.dumps(request.to_json(), indent=2) == TRANSACTION_REQUEST_JSON


def test_should_deserialize_transaction_request():
    request = TransactionRequest.from_json(json.loads(TRANSACTION_REQUEST_JSON))
    assert request.sender == H160.from_low_u64_be(5)
    assert request.to is None
    assert request.gas == 21_000
    assert request.gas_price is None
    assert request.value == 5_000_000
    assert request.data == Bytes(bytes.fromhex("010203"))
    assert request.nonce is None
    assert request.condition == TransactionCondition.block(5)


def test_transaction_request_requires_from():
    with pytest.raises(DecodeError):
        TransactionRequest.from_json({"gas": "0x1"})


def test_empty_call_request_serializes_to_empty_object():
    assert CallRequest().to_json() == {}


def test_call_request_round_trip_with_access_list():
    item = AccessListItem(address=H160.from_low_u64_be(7), storage_keys=[H256.from_low_u64_be(1)])
    request = CallRequest(sender=H160.from_low_u64_be(1), access_list=[item])
    encoded = request.to_json()
    assert encoded["accessList"][0]["address"] == "0x0000000000000000000000000000000000000007"
    assert CallRequest.from_json(encoded) == request


def test_timestamp_condition_round_trip():
    condition = TransactionCondition.timestamp(1_600_000_000)
    assert condition.to_json() == {"time": 1_600_000_000}
    assert TransactionCondition.from_json({"time": 1_600_000_000}) == condition


@pytest.mark.parametrize(
    "data",
    [{"height": 5}, {"block": 5, "time": 6}, {}, {"block": -1}, {"block": "5"}],
)
def test_invalid_condition_is_rejected(data):
    with pytest.raises(DecodeError):
        TransactionCondition.from_json(data)


def test_condition_out_of_range_is_rejected():
    with pytest.raises(ValueError):
        TransactionCondition.block(1 << 64)