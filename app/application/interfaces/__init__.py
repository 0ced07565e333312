"""Application interfaces (ports): service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.services import (
    ICommentStore,
    IEmailSender,
    INotificationCreator,
    IProjectStore,
    IWorkflowDefinitionSource,
    IWorkflowEngine,
)

__all__ = [
    "ICommentStore",
    "IEmailSender",
    "INotificationCreator",
    "IProjectStore",
    "IWorkflowDefinitionSource",
    "IWorkflowEngine",
]
