"""Domain layer: exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from scaling_reads.domain.exceptions import (
    ReadOnlyContextError,
    ResourceNotFoundException,
    ScalingReadsException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    "ReadOnlyContextError",
    "ResourceNotFoundException",
    "ScalingReadsException",
    "SqlNotConfiguredException",
    "ValidationException",
]
