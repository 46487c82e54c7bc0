"""HTTP middleware: request ID.

Applied in main app. Import and use from tasknest.main.
"""

from tasknest.middleware.request_id import RequestIDMiddleware

__all__ = [
    "RequestIDMiddleware",
]
