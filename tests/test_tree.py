"""Tests for the sorted-pair Merkle tree."""
import pytest
from eth_utils import keccak

from allowlist_merkle.errors import EmptyTreeError, InvalidHashFormat, LeafNotFound
from allowlist_merkle.leaf import encode_leaf
from allowlist_merkle.tree import MerkleTree
from allowlist_merkle.verify import hash_pair, verify_proof

from conftest import ADDR_A, ADDR_B, ADDR_C, OUTSIDER


def sorted_hash(a, b):
    return keccak(min(a, b) + max(a, b))


@pytest.fixture
def leaves():
    return [encode_leaf(a) for a in (ADDR_A, ADDR_B, ADDR_C)]


def test_three_leaf_root_promotes_odd_node(leaves):
    a, b, c = leaves
    tree = MerkleTree(leaves)
    assert tree.layers[1] == (sorted_hash(a, b), c)
    assert tree.root == sorted_hash(sorted_hash(a, b), c)
    assert tree.depth == 2
    assert len(tree) == 3


def test_root_is_deterministic(leaves):
    assert MerkleTree(leaves).root == MerkleTree(list(leaves)).root


def test_swapping_a_sorted_pair_keeps_root(leaves):
    a, b, c = leaves
    assert MerkleTree([b, a, c]).root == MerkleTree([a, b, c]).root


def test_reordering_leaves_changes_root(leaves):
    a, b, c = leaves
    assert MerkleTree([c, b, a]).root != MerkleTree([a, b, c]).root
    assert MerkleTree([a, c, b]).root != MerkleTree([a, b, c]).root


def test_leaf_layer_keeps_input_order(leaves):
    reordered = list(reversed(leaves))
    assert MerkleTree(reordered).leaves == tuple(reordered)


def test_three_leaf_proofs(leaves):
    a, b, c = leaves
    tree = MerkleTree(leaves)

    proof_b = tree.get_proof(b)
    assert proof_b == [a, c]
    assert tree.verify(b, proof_b)

    proof_a = tree.get_proof(a)
    assert proof_a == [b, c]
    assert not tree.verify(b, proof_a)

    # c was promoted on the first layer, so it has a single sibling
    assert tree.get_proof(c) == [sorted_hash(a, b)]
    assert tree.verify(c, tree.get_proof(c))


def test_single_leaf_tree():
    leaf = encode_leaf(ADDR_A)
    tree = MerkleTree([leaf])
    assert tree.root == leaf
    assert tree.depth == 0
    assert tree.get_proof(leaf) == []
    assert verify_proof(leaf, [], tree.root)


def test_empty_tree_has_no_root():
    tree = MerkleTree([])
    assert len(tree) == 0
    assert encode_leaf(ADDR_A) not in tree
    with pytest.raises(EmptyTreeError):
        tree.root
    with pytest.raises(EmptyTreeError):
        tree.hex_root
    with pytest.raises(EmptyTreeError):
        tree.get_proof(encode_leaf(ADDR_A))


def test_missing_leaf(leaves):
    tree = MerkleTree(leaves)
    outsider = encode_leaf(OUTSIDER)
    assert outsider not in tree
    with pytest.raises(LeafNotFound):
        tree.get_proof(outsider)


def test_index_out_of_range(leaves):
    with pytest.raises(IndexError):
        MerkleTree(leaves).get_proof_by_index(3)


def test_duplicate_leaves_use_first_position():
    a, b = encode_leaf(ADDR_A), encode_leaf(ADDR_B)
    tree = MerkleTree([a, b, a])
    assert len(tree) == 3
    assert tree.index_of(a) == 0
    assert tree.get_proof(a) == [b, a]
    assert tree.verify(a, tree.get_proof(a))
    # the second copy has its own valid path too
    assert tree.verify(a, tree.get_proof_by_index(2))


@pytest.mark.parametrize("count", [2, 4, 5, 7, 8, 9, 16, 33])
def test_every_leaf_round_trips(count):
    leaves = [keccak(i.to_bytes(32, "big")) for i in range(count)]
    tree = MerkleTree(leaves)
    for leaf in leaves:
        proof = tree.get_proof(leaf)
        assert len(proof) <= tree.depth
        assert verify_proof(leaf, proof, tree.root)


def test_layers_shrink_by_half():
    leaves = [keccak(bytes([i])) for i in range(9)]
    tree = MerkleTree(leaves)
    assert [len(layer) for layer in tree.layers] == [9, 5, 3, 2, 1]


def test_injected_hash_is_used_everywhere(leaves, stub_hash):
    a, b, c = leaves
    tree = MerkleTree(leaves, hash_fn=stub_hash)
    inner = hash_pair(a, b, stub_hash)
    assert tree.root == hash_pair(inner, c, stub_hash)
    assert tree.root != MerkleTree(leaves).root
    assert tree.verify(b, tree.get_proof(b))
    assert not verify_proof(b, tree.get_proof(b), tree.root)


def test_hex_helpers(leaves):
    tree = MerkleTree(leaves)
    assert tree.hex_root == "0x" + tree.root.hex()
    assert tree.get_hex_proof(leaves[1]) == ["0x" + p.hex() for p in tree.get_proof(leaves[1])]
    assert MerkleTree([leaf.hex() for leaf in leaves]).root == tree.root


def test_rejects_malformed_leaves():
    with pytest.raises(InvalidHashFormat):
        MerkleTree([b"short"])


def test_str_lists_every_node(leaves):
    tree = MerkleTree(leaves)
    text = str(tree)
    assert text.splitlines()[0].endswith(tree.hex_root)
    for leaf in leaves:
        assert "0x" + leaf.hex() in text


def test_free_claim_allowlist_vectors():
    """Root and proof for the free-claim allowlist, as the JS tree builds them with sortPairs."""
    leaves = [encode_leaf(a) for a in (ADDR_A, ADDR_B, ADDR_C)]
    tree = MerkleTree(leaves)
    assert tree.hex_root == "0x7e971219fbad5c456c9c4c8460a1d4010c3a2a1766a7a516cb0192787711dcc2"
    assert tree.get_hex_proof(leaves[2]) == [
        "0x70c4cad66b6c94a9a21977af60929232c734be01faedacf4012ac7c90cc1d54d",
    ]
