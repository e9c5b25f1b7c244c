"""
fairmint - emission schedule engine for fair-mint token launches.

Derives the multi-era minting curve from the launch form parameters and
checks it against the rules the on-chain program enforces, before any
transaction is built.
"""

from fairmint.version import __version__

__all__ = ["__version__"]
