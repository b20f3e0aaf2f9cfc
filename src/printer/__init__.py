"""Puzzle renderers."""

from .pdf import export_pdf

__all__ = ["export_pdf"]
