from __future__ import annotations

from typing import Optional


class UpstreamError(RuntimeError):
    """Raised by transports when the upstream cannot produce a usable payload.

    `kind` is one of: network, timeout, status, empty, parse, shape, disabled.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.detail = detail
