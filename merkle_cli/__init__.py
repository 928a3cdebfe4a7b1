"""
Merkle CLI

Command-line front end for the Merkle commitment toolkit.

Usage:
    python -m merkle_cli commit --item A --item B --item C
    python -m merkle_cli prove --index 1 --item A --item B --item C --out proof.json
    python -m merkle_cli verify proof.json --item B
    python -m merkle_cli demo
"""

__version__ = "0.1.0"
