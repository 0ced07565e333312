"""Domain layer: exceptions shared by every layer.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.exceptions import (
    EmailDeliveryException,
    EmailTemplateNotFoundException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
    WaveLaunchException,
)

__all__ = [
    "EmailDeliveryException",
    "EmailTemplateNotFoundException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
    "WaveLaunchException",
]
