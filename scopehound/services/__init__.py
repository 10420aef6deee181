"""Services for scopehound - build scheduling and the cscope facade."""

from .build_queue import BuildOperation, BuildQueue, SlotState
from .cscope_service import CscopeService

__all__ = ["BuildOperation", "BuildQueue", "CscopeService", "SlotState"]
