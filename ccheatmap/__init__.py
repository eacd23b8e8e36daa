"""Claude Code usage heatmap renderer."""

__version__ = "1.0.0"
