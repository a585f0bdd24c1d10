"""appstrap - declarative cross-platform application installer."""

__version__ = "0.1.0"
