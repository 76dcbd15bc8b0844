"""Catan opening recommender: board model, map generator and pair ranking."""

from .editor import BoardEditor, EditorConfig

__all__ = ["BoardEditor", "EditorConfig"]
