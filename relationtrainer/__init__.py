"""RelationTrainer package initialization.

Relational-reasoning drills: premise chains over abstract symbols, yes/no
questions, cipher and spatial modifiers, and an adaptive timed session engine.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
