"""Track Warframe recipes, owned components and where missing parts drop."""

__version__ = "0.1.0"