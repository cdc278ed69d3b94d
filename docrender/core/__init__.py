"""
Core - document rendering core

- DocumentRenderer: main entry point
- processor: HTML tree walker, block handlers, table helper
- functions: shared utilities
"""

from docrender.core.document_renderer import DocumentRenderer, RendererConfig
from docrender.core import functions
from docrender.core import processor

__all__ = [
    "DocumentRenderer",
    "RendererConfig",
    "functions",
    "processor",
]
