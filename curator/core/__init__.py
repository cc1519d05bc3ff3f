"""Core primitives shared across backend layers."""

from .guards import ActionBusy, ActionGuard
from .sessions import ACTIONS, CurationSession, SessionRegistry

__all__ = ["ACTIONS", "ActionBusy", "ActionGuard", "CurationSession", "SessionRegistry"]
