"""Polygon Bor chain specification, hardfork schedule and PoA consensus rules."""

__version__ = "0.1.0"

__all__ = [
    "block_validation",
    "chainspec",
    "constants",
    "difficulty",
    "ecdsa",
    "extra_data",
    "hardfork",
    "params",
    "proposer",
    "recents",
    "seal",
    "snapshot",
    "validation",
]