"""UIMap CLI: detect UI components and their imports in JS/TS source trees."""

__version__ = "0.1.0"
