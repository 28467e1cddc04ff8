"""HTTP middleware: request timeout and request ID.

Applied in main app; order matters (first added = outermost).
Import and use from scaling_reads.main.
"""

from scaling_reads.middleware.request_id import RequestIDMiddleware
from scaling_reads.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
