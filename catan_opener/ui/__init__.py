"""Renderer and prompt interfaces consumed by the editor."""

from .interfaces import AutoConfirmPrompt, Renderer, UserPrompt
from .render_model import RenderScene, build_render_scene

__all__ = ["AutoConfirmPrompt", "Renderer", "RenderScene", "UserPrompt", "build_render_scene"]
