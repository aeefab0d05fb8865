"""Weather-effect parameter mapping for the weather widget."""

__version__ = "0.4.0"
