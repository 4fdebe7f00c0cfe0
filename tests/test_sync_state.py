import pytest

from web3types.primitives import U256, DecodeError
from web3types.sync_state import SyncInfo, SyncState

EXPECTED_INFO = SyncInfo(
    starting_block=U256(0x0),
    current_block=U256(0x42),
    highest_block=U256(0x9001),
)


def _rpc_info():
    return dict(
        currentBlock="0x42",
        highestBlock="0x9001",
        knownStates="0x1337",
        pulledStates="0x13",
        startingBlock="0x0",
    )


def _subscription_info():
    return {key[0].upper() + key[1:]: value for key, value in _rpc_info().items()}


def test_should_deserialize_rpc_sync_info():
    value = SyncState.from_json(_rpc_info())
    assert value == SyncState(EXPECTED_INFO)
    assert value.is_syncing


def test_should_deserialize_subscription_sync_info():
    value = SyncState.from_json(dict(syncing=True, status=_subscription_info()))
    assert value == SyncState(EXPECTED_INFO)


def test_should_deserialize_boolean_not_syncing():
    value = SyncState.from_json(False)
    assert value == SyncState.not_syncing()
    assert not value.is_syncing


def test_should_deserialize_subscription_not_syncing():
    value = SyncState.from_json(dict(syncing=False))
    assert value == SyncState.not_syncing()


def test_should_not_deserialize_invalid_boolean_syncing():
    with pytest.raises(DecodeError):
        SyncState.from_json(True)


def test_should_not_deserialize_invalid_subscription_syncing():
    with pytest.raises(DecodeError):
        SyncState.from_json(dict(syncing=True))


def test_should_not_deserialize_invalid_subscription_not_syncing():
    with pytest.raises(DecodeError):
        SyncState.from_json(dict(syncing=False, status=_subscription_info()))


@pytest.mark.parametrize("data", [None, 5, "syncing", [], {}])
def test_other_values_are_rejected(data):
    with pytest.raises(DecodeError):
        SyncState.from_json(data)


def test_not_syncing_serializes_to_false():
    assert SyncState.not_syncing().to_json() is False


def test_syncing_serializes_to_camel_case_info():
    assert SyncState(EXPECTED_INFO).to_json() == {
        "startingBlock": "0x0",
        "currentBlock": "0x42",
        "highestBlock": "0x9001",
    }


@pytest.mark.parametrize("state", [SyncState(EXPECTED_INFO), SyncState.not_syncing()])
def test_round_trip(state):
    assert SyncState.from_json(state.to_json()) == state


def test_sync_info_round_trip():
    assert SyncInfo.from_json(EXPECTED_INFO.to_json()) == EXPECTED_INFO