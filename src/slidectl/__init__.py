"""slidectl — image acquisition and placement for slide decks."""

__version__ = "0.3.0"
