"""Error kinds surfaced to callers, each carrying its HTTP status and machine code."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Failure kinds. Value is (default HTTP status, machine-readable code)."""

    NOT_FOUND = (404, "not_found")
    UPSTREAM = (502, "upstream_error")
    UNSUPPORTED_SHAPE = (422, "unsupported_shape")
    METHOD_NOT_ALLOWED = (405, "method_not_allowed")
    INTERNAL = (500, "internal_error")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def code(self) -> str:
        return self.value[1]


class ResolverError(Exception):
    """Request-level failure. status_code defaults to the kind's status; UPSTREAM mirrors the upstream one."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        slug: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code or kind.status_code
        self.slug = slug

    @property
    def code(self) -> str:
        return self.kind.code


def not_found(message: str, slug: str | None = None) -> ResolverError:
    return ResolverError(ErrorKind.NOT_FOUND, message, slug=slug)


def upstream_error(message: str, status_code: int, slug: str | None = None) -> ResolverError:
    return ResolverError(ErrorKind.UPSTREAM, message, status_code=status_code, slug=slug)
