"""
CLI command modules.
"""

from merkle_cli.commands import commit, prove, verify, demo

__all__ = ["commit", "prove", "verify", "demo"]
