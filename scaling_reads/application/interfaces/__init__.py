"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from scaling_reads.infrastructure or scaling_reads.api.
"""

from scaling_reads.application.interfaces.repositories import IAlbumRepository
from scaling_reads.application.interfaces.services import ITransactionScope

__all__ = [
    "IAlbumRepository",
    "ITransactionScope",
]
