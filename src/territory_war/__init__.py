"""Territory conquest game core: territories, missions, attacks and combat."""

__version__ = "0.1.0"
