"""Service layer — acquisition strategies, placement, and the lifecycle controller.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
