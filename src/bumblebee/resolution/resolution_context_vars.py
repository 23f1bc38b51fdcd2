from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bumblebee.resolution.resolution_scope_model import ResolutionScope

current_resolution_scope: ContextVar["ResolutionScope"] = ContextVar("current_resolution_scope")
