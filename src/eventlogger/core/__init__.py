"""Core domain: models, ports and the dispatch engine."""
