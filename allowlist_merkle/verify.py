from typing import Iterable

from eth_utils import keccak

from .encoding import AddressLike, NodeLike, to_node
from .leaf import HashFn, solidity_leaf


def hash_pair(a: bytes, b: bytes, hash_fn: HashFn = keccak) -> bytes:
    # sorted pair, so proofs carry no left/right bits
    if a < b:
        return hash_fn(a + b)
    else:
        return hash_fn(b + a)


def process_proof(leaf: NodeLike, proof: Iterable[NodeLike], hash_fn: HashFn = keccak) -> bytes:
    """Fold a proof onto a leaf and return the root it implies."""
    computed_hash = to_node(leaf)
    for sibling in proof:
        computed_hash = hash_pair(computed_hash, to_node(sibling), hash_fn)
    return computed_hash


def verify_proof(
    leaf: NodeLike,
    proof: Iterable[NodeLike],
    root: NodeLike,
    hash_fn: HashFn = keccak,
) -> bool:
    """
    Check that `proof` links `leaf` to `root` under the sorted-pair rule.

    A wrong proof returns False. Inputs that are not 32-byte hashes raise
    InvalidHashFormat instead.
    """
    return process_proof(leaf, proof, hash_fn) == to_node(root)


def verify_claim(
    addr: AddressLike,
    proof: Iterable[NodeLike],
    root: NodeLike,
    padded: bool = False,
) -> bool:
    """
    Same check the contract runs on a claim:
        MerkleProof.verify(proof, root, keccak256(abi.encodePacked(msg.sender)))
    """
    return verify_proof(solidity_leaf(addr, padded=padded), proof, root, keccak)
