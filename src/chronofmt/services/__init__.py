"""Service layer — formatting operations and the ServiceResult contract.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
