"""Infrastructure layer — formatter caches and Babel-backed formatters.

This layer depends on stdlib, Babel, and the domain layer.
It must never import from services, commands, or output.
"""
