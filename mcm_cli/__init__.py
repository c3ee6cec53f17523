"""
MCM CLI

Command-line interface for the MCM proposal compiler.

Usage:
    python -m mcm_cli root proposal.json
    python -m mcm_cli hash --root 0x... --valid-until 1767225600
    python -m mcm_cli hierarchy "m:root:1o2(s:0x...,s:0x...)"
    python -m mcm_cli verify proposal.json --root 0x...
    python -m mcm_cli config --init
"""

__version__ = "0.1.0"
