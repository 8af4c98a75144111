"""Allowlist loading and address-level proof lookups."""
import json
import logging
from collections import Counter
from pathlib import Path
from typing import List, Sequence, Union

from eth_utils import keccak

from .encoding import AddressLike, NodeLike, format_address, parse_address, to_hex
from .errors import AllowlistFormatError, LeafNotFound
from .leaf import HashFn, encode_leaf
from .tree import MerkleTree

logger = logging.getLogger(__name__)


def _parse_text(text: str) -> List[str]:
    entries = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            entries.append(line)
    return entries


def load_addresses(path: Union[str, Path]) -> List[bytes]:
    """
    Read an ordered address list from disk.

    Accepted formats:
      - JSON array of address strings
      - JSON object with an "addresses" array
      - plain text, one address per line, '#' starts a comment
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise AllowlistFormatError(f"{path}: not UTF-8 text") from e

    if path.suffix.lower() == ".json" or text.lstrip().startswith(("[", "{")):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise AllowlistFormatError(f"{path}: invalid JSON: {e}") from e
        if isinstance(data, dict):
            data = data.get("addresses")
        if not isinstance(data, list) or not all(isinstance(a, str) for a in data):
            raise AllowlistFormatError(f"{path}: expected a list of address strings")
        entries = data
    else:
        entries = _parse_text(text)

    addresses = [parse_address(a) for a in entries]
    logger.info("Loaded %d addresses from %s", len(addresses), path)
    return addresses


class Allowlist:
    """An ordered address list and the tree built over it."""

    def __init__(self, addresses: Sequence[AddressLike], hash_fn: HashFn = keccak, padded: bool = False):
        self.hash_fn = hash_fn
        self.padded = padded
        self.addresses = tuple(parse_address(a) for a in addresses)

        duplicates = [a for a, n in Counter(self.addresses).items() if n > 1]
        for a in duplicates:
            logger.warning("Address %s appears more than once in the allowlist", format_address(a))

        self.leaves = tuple(self.leaf(a) for a in self.addresses)
        self.tree = MerkleTree(self.leaves, hash_fn=hash_fn)

    @classmethod
    def from_file(cls, path: Union[str, Path], hash_fn: HashFn = keccak, padded: bool = False) -> "Allowlist":
        return cls(load_addresses(path), hash_fn=hash_fn, padded=padded)

    def __len__(self) -> int:
        return len(self.addresses)

    def leaf(self, addr: AddressLike) -> bytes:
        return encode_leaf(addr, hash_fn=self.hash_fn, padded=self.padded)

    @property
    def root(self) -> bytes:
        return self.tree.root

    @property
    def hex_root(self) -> str:
        return self.tree.hex_root

    def contains(self, addr: AddressLike) -> bool:
        return self.leaf(addr) in self.tree

    def proof_for(self, addr: AddressLike) -> List[bytes]:
        try:
            return self.tree.get_proof(self.leaf(addr))
        except LeafNotFound:
            raise LeafNotFound(f"Address {format_address(addr)} is not in the allowlist") from None

    def hex_proof_for(self, addr: AddressLike) -> List[str]:
        return [to_hex(p) for p in self.proof_for(addr)]

    def verify(self, addr: AddressLike, proof: Sequence[NodeLike]) -> bool:
        return self.tree.verify(self.leaf(addr), proof)
