import pytest
from eth_utils import keccak

from allowlist_merkle.errors import InvalidAddressFormat
from allowlist_merkle.leaf import address_payload, encode_leaf, solidity_leaf

from conftest import ADDR_A, ADDR_B, TRON_ADDR


def test_leaf_hashes_address_bytes_not_text():
    leaf = encode_leaf(ADDR_A)
    assert len(leaf) == 32
    assert leaf == keccak(bytes.fromhex(ADDR_A[2:]))
    assert leaf != keccak(text=ADDR_A)
    assert leaf != keccak(text=ADDR_A.lower())


def test_leaf_ignores_address_case():
    assert encode_leaf(ADDR_A) == encode_leaf(ADDR_A.lower())


def test_leaf_is_deterministic_and_distinct():
    assert encode_leaf(ADDR_A) == encode_leaf(ADDR_A)
    assert encode_leaf(ADDR_A) != encode_leaf(ADDR_B)


def test_padded_leaf():
    payload = address_payload(ADDR_A, padded=True)
    assert len(payload) == 32
    assert payload[:12] == b"\x00" * 12
    assert encode_leaf(ADDR_A, padded=True) == keccak(payload)
    assert encode_leaf(ADDR_A, padded=True) != encode_leaf(ADDR_A)


def test_injected_hash(stub_hash):
    assert encode_leaf(ADDR_A, hash_fn=stub_hash) == stub_hash(bytes.fromhex(ADDR_A[2:]))


@pytest.mark.parametrize("padded", [False, True])
def test_solidity_leaf_matches_encoder(padded):
    for addr in (ADDR_A, ADDR_B, ADDR_A.lower()):
        assert solidity_leaf(addr, padded=padded) == encode_leaf(addr, padded=padded)


def test_tron_leaf_uses_evm_bytes():
    from allowlist_merkle.encoding import parse_address
    assert encode_leaf(TRON_ADDR) == keccak(parse_address(TRON_ADDR))


def test_leaf_rejects_bad_address():
    with pytest.raises(InvalidAddressFormat):
        encode_leaf("0xdeadbeef")
