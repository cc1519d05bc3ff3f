"""Curation actions (the boundary the HTTP layer calls into)."""

from .service import ActionResult, CurationService

__all__ = ["ActionResult", "CurationService"]
