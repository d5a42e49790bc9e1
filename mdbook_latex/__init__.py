"""mdbook-latex: render an mdBook into LaTeX and PDF."""

__version__ = "0.1.0"
