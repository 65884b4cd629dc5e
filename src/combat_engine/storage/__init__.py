"""Storage layer for the Combat & Progression Engine.

Provides explicit keyed repositories in place of ad-hoc global maps.
"""

from combat_engine.storage.repository import Repository


__all__ = ["Repository"]
