"""HTTP middleware: request size limit and request ID (raw ASGI).

Applied in main app; order matters (first added = outermost).
"""

from app.middleware.request_id import RequestIDMiddleware
from app.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
]
