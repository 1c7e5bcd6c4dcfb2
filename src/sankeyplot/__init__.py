"""Two-tier Sankey flow diagrams from plain-text data files."""
__version__ = "0.1.0"
