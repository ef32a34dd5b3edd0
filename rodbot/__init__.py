"""rodbot: run shell commands in response to GitHub issue comments."""

__version__ = "0.1.0"
