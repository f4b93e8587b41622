"""Building blocks for Jsonnet: errors, lazy values, scopes, arrays, options and comment layout."""

__version__ = "0.1.0"