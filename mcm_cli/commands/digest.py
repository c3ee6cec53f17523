"""
CLI Hash Command

Compute the digest signers sign for a root that is valid until a given
timestamp.

Usage:
    mcm hash --root 0x... --valid-until 1767225600 [--json]
"""

from __future__ import annotations

import sys
from argparse import Namespace

from mcm.crypto.hashing import hash_from_hex, to_hex
from mcm.proposal import compute_hash_to_sign
from mcm.schemas.canonical import dumps_canonical
from mcm_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, wants_json


def hash_cmd(args: Namespace) -> int:
    """Execute the hash command."""
    try:
        root = hash_from_hex(args.root)
        digest = compute_hash_to_sign(root, args.valid_until)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if wants_json(args):
        print(dumps_canonical({
            "root": root,
            "valid_until": args.valid_until,
            "hash_to_sign": digest,
        }, indent=2))
    else:
        print(f"root: {to_hex(root)}")
        print(f"valid_until: {args.valid_until}")
        print(f"hash_to_sign: {to_hex(digest)}")

    return EXIT_SUCCESS
