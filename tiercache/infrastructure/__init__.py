"""Infrastructure Layer: Contains concrete implementations and adapters.

Provides the in-memory cache store, the time source, configuration loading,
logging setup and the console display used by the CLI.
"""
