"""Dialogue management."""

from bella.dm.controller import DialogueController

__all__ = ["DialogueController"]
