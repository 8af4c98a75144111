"""Sorted-pair Merkle trees for NFT allowlist claims."""
from .allowlist import Allowlist, load_addresses
from .encoding import format_address, parse_address, to_hex, to_node
from .errors import (
    AllowlistFormatError,
    AllowlistMerkleError,
    EmptyTreeError,
    InvalidAddressFormat,
    InvalidHashFormat,
    LeafNotFound,
)
from .leaf import encode_leaf, solidity_leaf
from .tree import MerkleTree
from .verify import hash_pair, process_proof, verify_claim, verify_proof

__version__ = "0.1.0"

__all__ = [
    "Allowlist",
    "AllowlistFormatError",
    "AllowlistMerkleError",
    "EmptyTreeError",
    "InvalidAddressFormat",
    "InvalidHashFormat",
    "LeafNotFound",
    "MerkleTree",
    "encode_leaf",
    "format_address",
    "hash_pair",
    "load_addresses",
    "parse_address",
    "process_proof",
    "solidity_leaf",
    "to_hex",
    "to_node",
    "verify_claim",
    "verify_proof",
]
