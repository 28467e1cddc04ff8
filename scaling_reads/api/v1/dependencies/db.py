"""Data context dependencies (composition root).

get_read_context yields a read-only context on the replica pool;
get_write_context yields a write-capable context on the primary.
"""

from scaling_reads.infrastructure.persistence.database import (
    get_read_context,
    get_write_context,
)

__all__ = ["get_read_context", "get_write_context"]
