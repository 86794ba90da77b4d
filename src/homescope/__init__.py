"""homescope - read-only browser for a sandboxed home directory."""

__version__ = "0.1.0"
