"""Core business logic for the link shortener."""

from .shortcode import ShortCodeGenerator
from .registry import LinkRegistry
from .analytics import AnalyticsRecorder
from .service import LinkService
from .sweeper import ExpirySweeper

__all__ = [
    "ShortCodeGenerator",
    "LinkRegistry",
    "AnalyticsRecorder",
    "LinkService",
    "ExpirySweeper",
]
