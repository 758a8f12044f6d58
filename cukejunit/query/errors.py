from __future__ import annotations

from typing import Any, Dict, Optional


class CorrelationError(RuntimeError):
    """An event referenced an id the stream guarantees to have seen already."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        detail: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = dict(detail or {})


def missing(kind: str, ref: str, *, referenced_by: str) -> CorrelationError:
    return CorrelationError(
        f"{kind}.unknown",
        f"Expected to find {kind} '{ref}' referenced by {referenced_by}",
        detail={"kind": kind, "id": ref, "referenced_by": referenced_by},
    )
