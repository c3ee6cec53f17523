"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification
matching the on-chain MCM verifier.

Commitment Rules (Hard Contracts):
1. Parent hashing: hash_pair(a, b) = keccak256(min(a, b) + max(a, b))
   - Sorted by value, so pairing is commutative and proofs carry no
     left/right flags
2. Odd rule: the last unpaired node of a level is promoted unchanged to
   the next level (never duplicated, never hashed with itself)
3. Single leaf: root = leaf, proof = []
4. Empty leaves: rejected with MerkleStructureException

Because of rule 2 a leaf's proof skips any level where its path node was
promoted, so proof length is not ceil(log2(n)) in general.

Determinism Notes:
- Leaf ordering is defined by the caller (metadata leaf first, then
  operations in nonce order); this module never sorts leaves
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from mcm.crypto.hashing import HASH_SIZE, keccak256
from mcm.schemas.errors import MerkleStructureException


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    Attributes:
        leaf: The leaf hash being proven
        index: The 0-based index of the leaf in the original leaf list
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


@dataclass(frozen=True)
class MerkleTree:
    """
    All levels of a Merkle tree, bottom (leaves) to top (root).

    Recomputed on demand from the leaves; never persisted.
    """
    levels: tuple[tuple[bytes, ...], ...]

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.levels[0]

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def depth(self) -> int:
        """Number of levels, leaves and root included."""
        return len(self.levels)

    def proof(self, index: int) -> list[bytes]:
        """
        Sibling hashes for the leaf at ``index``.

        At each level the sibling is index+1 for even and index-1 for odd
        indices; it is recorded only if it exists at that level.
        """
        if index < 0 or index >= len(self.leaves):
            raise IndexError(
                f"Leaf index {index} out of range for {len(self.leaves)} leaves"
            )

        siblings: list[bytes] = []
        current_index = index
        for level in self.levels[:-1]:
            sibling_index = current_index + 1 if current_index % 2 == 0 else current_index - 1
            if sibling_index < len(level):
                siblings.append(level[sibling_index])
            current_index //= 2
        return siblings

    @property
    def proofs(self) -> list[list[bytes]]:
        """Proofs for every leaf; ``proofs[i]`` belongs to ``leaves[i]``."""
        return [self.proof(i) for i in range(len(self.leaves))]


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two nodes.

    The smaller value goes first, so hash_pair(a, b) == hash_pair(b, a).

    Raises:
        ValueError: If either input is not a 32-byte hash
    """
    if len(a) != HASH_SIZE or len(b) != HASH_SIZE:
        raise ValueError(
            f"hash_pair expects two {HASH_SIZE}-byte hashes, got {len(a)} and {len(b)} bytes"
        )
    left, right = (a, b) if a < b else (b, a)
    return keccak256(left + right)


def build_merkle_tree(leaves: Sequence[bytes]) -> MerkleTree:
    """
    Build every level of the tree from a sequence of leaf hashes.

    Example: [a, b, c] -> [hash_pair(a, b), c] -> [hash_pair(hash_pair(a, b), c)]

    Raises:
        MerkleStructureException: If leaves is empty
        ValueError: If a leaf is not a 32-byte hash
    """
    if len(leaves) == 0:
        raise MerkleStructureException("Cannot build Merkle tree with no leaves")

    for i, leaf in enumerate(leaves):
        if len(leaf) != HASH_SIZE:
            raise ValueError(f"Leaf {i} must be {HASH_SIZE} bytes, got {len(leaf)}")

    levels: list[tuple[bytes, ...]] = [tuple(leaves)]
    current_level = levels[0]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level), 2):
            if i + 1 < len(current_level):
                next_level.append(hash_pair(current_level[i], current_level[i + 1]))
            else:
                # Odd node out is promoted unchanged
                next_level.append(current_level[i])
        current_level = tuple(next_level)
        levels.append(current_level)

    return MerkleTree(levels=tuple(levels))


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """Compute the Merkle root for a sequence of leaf hashes."""
    return build_merkle_tree(leaves).root


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Raises:
        IndexError: If index is out of range
        MerkleStructureException: If leaves is empty
    """
    tree = build_merkle_tree(leaves)
    siblings = tree.proof(index)
    return MerkleProof(
        leaf=tree.leaves[index],
        index=index,
        siblings=siblings,
        root=tree.root,
    )


def compute_root_from_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """Fold a leaf through its proof with hash_pair."""
    current_hash = leaf
    for sibling in siblings:
        current_hash = hash_pair(current_hash, sibling)
    return current_hash


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof against its claimed root.

    Pairing is commutative, so the leaf index plays no part in the fold.
    Malformed hashes make the proof invalid rather than raising.
    """
    try:
        return compute_root_from_proof(proof.leaf, proof.siblings) == proof.root
    except ValueError:
        return False


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels (leaves and root inclusive) for ``num_leaves`` leaves.

    Promotion keeps ceil(n / 2) nodes per level, the same count as
    duplicate-padding would, so depth is 1 + ceil(log2(n)).
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "MerkleProof",
    "MerkleTree",
    "hash_pair",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
