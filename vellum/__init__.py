"""
Vellum - marker-driven HTML template processing

Turns an HTML template carrying a small marker language (placeholders, loops,
conditional sections, layout blocks) into finished markup, driven by an
arbitrary data mapping.

Architecture:
- Templating Context: Loop expansion, placeholder resolution, pruning, layout
- Exporting Context: Markdown, text and structured tree export
"""

__version__ = "0.1.0"
