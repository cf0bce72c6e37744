"""Entity-component core, skeletal animation and COLLADA loading for a low-poly game."""

__version__ = "0.1.0"