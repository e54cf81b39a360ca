"""Order queue engine for the Laundry Express counter."""

__version__ = "0.1.0"
