import pytest

from web3types.parity import (
    EthProtocolInfo,
    FilterCondition,
    ParityPeerInfo,
    ParityPeerType,
    ParityPendingTransactionFilter,
    ParityPendingTransactionFilterBuilder,
    PeerNetworkInfo,
    PeerProtocolsInfo,
    PipProtocolInfo,
    ToFilter,
)
from web3types.primitives import H160, U64, U256, DecodeError

ADDRESS_HEX = "0x0000000000000000000000000000000000000005"


def _peer_json():
    return {
        "id": "peer-1",
        "name": "node/v1.0.0",
        "caps": ["eth/62", "eth/63"],
        "network": {"remoteAddress": "127.0.0.1:30303", "localAddress": "127.0.0.1:30304"},
        "protocols": {
            "eth": {"version": 63, "difficulty": "0x400", "head": "0xabcd"},
            "pip": None,
        },
    }


def _peers_json():
    return {"active": 1, "connected": 1, "max": 25, "peers": [_peer_json()]}


def test_peer_type_decodes_fields():
    peers = ParityPeerType.from_json(_peers_json())
    assert peers.active == 1
    assert peers.max == 25
    peer = peers.peers[0]
    assert peer.id == "peer-1"
    assert peer.caps == ["eth/62", "eth/63"]
    assert peer.network.remote_address == "127.0.0.1:30303"
    assert peer.protocols.eth.version == 63
    assert peer.protocols.eth.difficulty == U256.from_json("0x400")
    assert peer.protocols.pip is None


def test_peer_type_round_trip():
    data = _peers_json()
    assert ParityPeerType.from_json(data).to_json() == data


def test_missing_optional_fields_become_none():
    data = _peer_json()
    del data["id"]
    data["protocols"] = {}
    peer = ParityPeerInfo.from_json(data)
    assert peer.id is None
    assert peer.protocols == PeerProtocolsInfo()


def test_network_info_uses_camel_case_keys():
    info = PeerNetworkInfo(remote_address="a", local_address="b")
    assert info.to_json() == {"remoteAddress": "a", "localAddress": "b"}


def test_network_info_missing_field_fails():
    with pytest.raises(DecodeError):
        PeerNetworkInfo.from_json({"remoteAddress": "127.0.0.1:30303"})


def test_pip_requires_difficulty():
    with pytest.raises(DecodeError):
        PipProtocolInfo.from_json({"version": 1, "head": "0x01"})


def test_pip_round_trip():
    data = {"version": 1, "difficulty": "0x10", "head": "0x01"}
    assert PipProtocolInfo.from_json(data).to_json() == data


def test_eth_version_out_of_u32_range_fails():
    with pytest.raises(DecodeError):
        EthProtocolInfo.from_json({"version": 1 << 32, "head": "0x01"})


def test_peer_type_rejects_non_object():
    with pytest.raises(DecodeError):
        ParityPeerType.from_json([1, 2, 3])


def test_filter_condition_tags():
    value = U64(3)
    assert FilterCondition.lower_than(value).to_json() == {"lt": value.to_json()}
    assert FilterCondition.equal(value).to_json() == {"eq": value.to_json()}
    assert FilterCondition.greater_than(value).to_json() == {"gt": value.to_json()}


def test_to_filter_address_and_action():
    address = H160.from_low_u64_be(5)
    assert ToFilter.address(address).to_json() == {"eq": ADDRESS_HEX}
    assert ToFilter.action().to_json() == {"action": "contract_creation"}


def test_empty_filter_serializes_to_empty_object():
    assert ParityPendingTransactionFilter.builder().build().to_json() == {}


def test_builder_fields_and_keys():
    address = H160.from_low_u64_be(5)
    built = (
        ParityPendingTransactionFilter.builder()
        .sender(address)
        .to(ToFilter.action())
        .gas(21_000)
        .gas_price(FilterCondition.greater_than(1))
        .value(FilterCondition.lower_than(U256(7)))
        .nonce(2)
        .build()
    )
    assert built.to_json() == {
        "from": {"eq": ADDRESS_HEX},
        "to": {"action": "contract_creation"},
        "gas": {"eq": U64(21_000).to_json()},
        "gas_price": {"gt": U64(1).to_json()},
        "value": {"lt": U256(7).to_json()},
        "nonce": {"eq": U256(2).to_json()},
    }


def test_builder_is_immutable():
    base = ParityPendingTransactionFilterBuilder()
    changed = base.nonce(1)
    assert base.build().nonce is None
    assert changed.build().nonce == FilterCondition.equal(U256(1))


def test_builder_later_setter_wins():
    built = ParityPendingTransactionFilter.builder().gas(1).gas(2).build()
    assert built.gas == FilterCondition.equal(U64(2))
    assert list(built.to_json()) == ["gas"]


def test_to_filter_with_address_serializes_only_to():
    address = H160.from_low_u64_be(5)
    built = ParityPendingTransactionFilter.builder().to(ToFilter.address(address)).build()
    assert built.to_json() == {"to": {"eq": ADDRESS_HEX}}
    assert built.to.is_action is False
    assert ToFilter.action().is_action is True