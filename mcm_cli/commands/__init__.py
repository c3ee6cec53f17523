"""
CLI command modules.
"""

from mcm_cli.commands import root, digest, hierarchy, verify

__all__ = ["root", "digest", "hierarchy", "verify"]
