"""
MCM Proposal Compiler

Compiles many-chain multi-sig governance inputs into the artifacts the
on-chain program verifies:

- mcm.hierarchy: nested signer DSL -> flat group arrays
- mcm.proposal: proposal -> Merkle root, proofs and signing digest
"""

__version__ = "0.1.0"
