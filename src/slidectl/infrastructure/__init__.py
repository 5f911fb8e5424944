"""Infrastructure layer — host document sessions, the document gateway, HTTP.

This layer depends on stdlib, third-party libs (python-pptx, httpx), and
the domain types it exchanges with services.
It must never import from services, commands, or output.
"""
