"""ChromaForge - transparent icon assets from mask-color renders."""

__version__ = "1.0.0"
