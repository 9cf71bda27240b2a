"""sitewatch - single-target website availability monitor."""

__version__ = "1.0.0"
