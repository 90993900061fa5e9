"""
Top-level package for the Qdrant cookbook registry.

This package reads the declarative registry of cookbook entries (ETL
recipes, agent patterns and Qdrant configuration examples), enriches
each entry with the description and code of the notebook it points to,
and serves the result through a small JSON API, a command-line runner
and a build-time catalog snapshot.  There are no side-effects on import
beyond reading environment variables for configuration.
"""
