"""Core date resolution: value parsing, extractors and the resolver."""
