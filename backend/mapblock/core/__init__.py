"""Core configuration, options lookup and logging setup."""
