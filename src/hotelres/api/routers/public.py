"""Operational routes shared by every deployment."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Liveness check; does not touch the database."""
    return {"status": "ok"}
