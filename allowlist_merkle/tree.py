import logging
from typing import Iterable, List, Sequence, Tuple

from eth_utils import keccak

from .encoding import NodeLike, to_hex, to_node
from .errors import EmptyTreeError, LeafNotFound
from .leaf import HashFn
from .verify import hash_pair, verify_proof

logger = logging.getLogger(__name__)


class MerkleTree:
    """
    Sorted-pair Merkle tree over 32-byte leaves.

    Leaves keep their input order. Siblings are hashed as
    hash(min(a, b) || max(a, b)) and an unpaired last node is carried up
    to the next layer unchanged, so a proof is a plain list of siblings.

    An empty tree can be built, but asking it for a root or a proof
    raises EmptyTreeError.
    """

    def __init__(self, leaves: Iterable[NodeLike], hash_fn: HashFn = keccak):
        self.hash_fn = hash_fn
        self._layers = self._build_tree(tuple(to_node(leaf) for leaf in leaves))
        if self:
            logger.debug("Built tree: %d leaves, %d layers, root %s",
                         len(self), len(self._layers), self.hex_root)

    def _build_tree(self, leaves: Tuple[bytes, ...]) -> Tuple[Tuple[bytes, ...], ...]:
        tree = [leaves]
        current = leaves
        while len(current) > 1:
            nxt = []
            for i in range(0, len(current), 2):
                if i + 1 < len(current):
                    nxt.append(hash_pair(current[i], current[i + 1], self.hash_fn))
                else:
                    nxt.append(current[i])
            current = tuple(nxt)
            tree.append(current)
        return tuple(tree)

    def __len__(self) -> int:
        return len(self._layers[0])

    def __contains__(self, leaf) -> bool:
        if not self:
            return False
        try:
            self.index_of(leaf)
        except LeafNotFound:
            return False
        return True

    def __str__(self) -> str:
        lines = []
        for depth, layer in enumerate(reversed(self._layers)):
            for node in layer:
                lines.append("  " * depth + "└─ " + to_hex(node))
        return "\n".join(lines)

    @property
    def leaves(self) -> Tuple[bytes, ...]:
        return self._layers[0]

    @property
    def layers(self) -> Tuple[Tuple[bytes, ...], ...]:
        return self._layers

    @property
    def depth(self) -> int:
        """Number of hashing rounds between the leaves and the root."""
        return len(self._layers) - 1

    @property
    def root(self) -> bytes:
        if not self:
            raise EmptyTreeError("Merkle tree has no leaves, root is undefined")
        return self._layers[-1][0]

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    def index_of(self, leaf: NodeLike) -> int:
        """First position of `leaf` in the leaf layer."""
        if not self:
            raise EmptyTreeError("Merkle tree has no leaves")
        node = to_node(leaf)
        try:
            return self.leaves.index(node)
        except ValueError:
            raise LeafNotFound(f"Leaf {to_hex(node)} is not in the tree") from None

    def get_proof_by_index(self, index: int) -> List[bytes]:
        if not self:
            raise EmptyTreeError("Merkle tree has no leaves")
        if not 0 <= index < len(self):
            raise IndexError(f"Leaf index {index} out of range for {len(self)} leaves")
        proof = []
        idx = index
        for layer in self._layers[:-1]:
            sibling = idx ^ 1
            # promoted nodes have no sibling on this layer
            if sibling < len(layer):
                proof.append(layer[sibling])
            idx //= 2
        return proof

    def get_proof(self, leaf: NodeLike) -> List[bytes]:
        return self.get_proof_by_index(self.index_of(leaf))

    def get_hex_proof(self, leaf: NodeLike) -> List[str]:
        return [to_hex(p) for p in self.get_proof(leaf)]

    def verify(self, leaf: NodeLike, proof: Sequence[NodeLike]) -> bool:
        return verify_proof(leaf, proof, self.root, self.hash_fn)
