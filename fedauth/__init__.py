"""fedauth: provider-aware authentication over Firebase."""

__version__ = "0.1.0"
