"""Client-side asset workflow: upload an image, then request an AI modification of it."""

__version__ = "0.1.0"
