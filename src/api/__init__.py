"""FastAPI host for the chat UI.

Endpoints:
    - GET /health: Service health status
    - /: NiceGUI chat page (mounted by src.main)
"""

from src.api.app import create_app

__all__ = ["create_app"]
