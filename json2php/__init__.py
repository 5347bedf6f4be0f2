"""Convert pasted JSON into canonical JSON and PHP array literals."""

__version__ = "0.1.0"
