"""
Seeds: deterministic random streams for search strategies.

Provides:

- SeedBundle: experiment seed with named, SHA-256 derived sub-streams
"""

from benchlab.seeds.bundle import SeedBundle

__all__ = [
    "SeedBundle",
]
