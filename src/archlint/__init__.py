"""archlint — architecture risk lint for source trees."""

__version__ = "0.1.0"
