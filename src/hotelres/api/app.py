"""ASGI entry point: ``uvicorn hotelres.api.app:app``."""

from .factory import create_app

app = create_app()
