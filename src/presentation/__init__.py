"""
Presentation adapters: turn FrameResults into something people can see.
"""

from .overlay import render_overlay
from .presenters import Presenter, DisplayPresenter, RecordingPresenter, WebStatePresenter

__all__ = [
    "render_overlay",
    "Presenter",
    "DisplayPresenter",
    "RecordingPresenter",
    "WebStatePresenter",
]
