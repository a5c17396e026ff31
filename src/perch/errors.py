"""Perch exception hierarchy.

Shared across the catalog, the mount router, the ASGI handler, and the
CLI so every module raises and catches the same types.

Startup errors (``ConfigurationError`` and its ``ManifestError`` family)
abort initialization.  ``ResourceUnavailable`` fails a single request.
``HTTPError`` maps directly to a status code.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a mount descriptor or app configuration is invalid.

    Typically raised during ``App._freeze()`` at startup.
    """


class ManifestError(ConfigurationError):
    """A checksum manifest could not be turned into a catalog."""

    reason = "invalid manifest"

    def __init__(self, manifest: str, detail: str = "") -> None:
        self.manifest = manifest
        self.detail = detail
        message = f"{self.reason}: {manifest}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ManifestNotFound(ManifestError):  # noqa: N818
    reason = "manifest not found"


class UnreadableManifest(ManifestError):
    """The manifest exists but its bytes could not be read or decoded."""

    reason = "unreadable manifest"


class MalformedManifestLine(ManifestError):
    """A data line did not contain exactly two non-empty fields."""

    reason = "malformed manifest line"

    def __init__(self, manifest: str, line: str, lineno: int) -> None:
        self.line = line
        self.lineno = lineno
        super().__init__(manifest, f"line {lineno}: {line!r}")


class UnresolvableContentType(ManifestError):
    reason = "unresolvable content type"

    def __init__(self, manifest: str, path: str) -> None:
        self.path = path
        super().__init__(manifest, path)


class DuplicateResource(ManifestError):
    reason = "duplicate manifest entry"

    def __init__(self, manifest: str, path: str) -> None:
        self.path = path
        super().__init__(manifest, path)


class MissingRootResource(ManifestError):
    """The configured index document is not listed in the manifest."""

    reason = "missing root resource"

    def __init__(self, manifest: str, index: str) -> None:
        self.index = index
        super().__init__(manifest, index)


class ResourceUnavailable(PerchError):  # noqa: N818
    """The manifest lists a file the byte source cannot produce.

    Indicates a packaging mismatch between the build and its manifest.
    Fails the current request only; the catalog entry stays valid.
    """

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"Resource not found: {location}")


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware or the innermost dispatch. The ASGI handler
    catches these and turns them into a plain status response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no mount claimed the request path and there is no fallback."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the path belongs to a mount but the method is not servable.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
