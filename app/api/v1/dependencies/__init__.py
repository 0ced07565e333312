"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers; repositories, services and the
workflow engine are assembled here from infrastructure implementations.
"""

from app.api.v1.dependencies.db import get_http_client
from app.api.v1.dependencies.workflow import (
    build_workflow_engine,
    dispatch_event_in_background,
    get_workflow_engine,
    get_workflow_repo,
    get_workflow_repo_for_write,
)

__all__ = [
    "build_workflow_engine",
    "dispatch_event_in_background",
    "get_http_client",
    "get_workflow_engine",
    "get_workflow_repo",
    "get_workflow_repo_for_write",
]
