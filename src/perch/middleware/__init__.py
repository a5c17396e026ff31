"""Middleware: the request pipeline around mount dispatch.

``SPAMounts`` is installed automatically by ``App`` as the innermost
middleware; user middleware registered with ``app.add_middleware()``
wraps it.
"""

from perch.middleware.protocol import Middleware, Next
from perch.middleware.spa import SPAMounts

__all__ = ["Middleware", "Next", "SPAMounts"]
