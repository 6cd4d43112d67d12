"""Resource types, selectors, quantities and sharing settings for dynamic GPU allocation."""

__version__ = "0.1.0"