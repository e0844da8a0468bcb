"""checkvault - checklist views over a markdown vault."""

__version__ = "0.1.0"
