"""Console simulator of a segmented CPU stepping through simple assembly instructions."""

__version__ = "0.1.0"