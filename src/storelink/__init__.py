"""storelink - delegated marketplace API access for browser sessions."""

__version__ = "0.1.0"
