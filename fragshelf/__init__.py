"""FragShelf: a personal fragrance collection tracker with a recommendation engine."""

__version__ = "0.1.0"
