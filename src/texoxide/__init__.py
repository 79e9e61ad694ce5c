"""texoxide: frecency-ranked file launcher."""

__version__ = "0.1.0"
