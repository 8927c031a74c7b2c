"""
QUIRE - Quick Unified Resume Imposition Engine

Layout and pagination engine for a browser-based resume builder. Takes a normalized
resume record and a fixed physical page size, and decides how content blocks are
split across pages, how far text shrinks to fit a page budget, and how that decision
stays consistent while the user edits, reorders, or pins sections.

Architecture:
- Document Context: Normalized resume record and user-orderable section definitions
- Layout Context: Block collection, pagination, text fitting, and session state
- Rendering Context: Page materialization (HTML) for preview, print, and export
"""

__version__ = "0.1.0"
