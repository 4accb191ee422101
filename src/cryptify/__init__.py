"""cryptify: password-based file encryption."""

__version__ = "1.0.0"
