"""Domain layer — instants, cache keys, unit selection, and token patterns.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
