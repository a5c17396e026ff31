"""Extension to MIME type table for SPA bundles.

Closed table: a manifest entry whose type cannot be named here is
rejected at load time instead of being served as ``application/octet-stream``.
"""

from types import MappingProxyType

CONTENT_TYPES: MappingProxyType[str, str] = MappingProxyType(
    {
        "css": "text/css",
        "gif": "image/gif",
        "html": "text/html",
        "jpeg": "image/jpeg",
        "jpg": "image/jpeg",
        "js": "text/javascript",
        "png": "image/png",
        "svg": "image/svg+xml",
        "ttf": "font/ttf",
        "webp": "image/webp",
        "woff": "font/woff",
        "woff2": "font/woff2",
    }
)


def content_type_for(path: str) -> str | None:
    """Return the MIME type for *path*, or ``None`` if it has no known extension.

    The extension is everything after the last dot of the whole relative
    path.  At least two characters must precede the dot and at least one
    must follow it, so ``"a.js"`` and ``"main."`` have no type.  Matching is
    case-sensitive.
    """
    dot = path.rfind(".")
    if dot < 2 or dot >= len(path) - 1:
        return None
    return CONTENT_TYPES.get(path[dot + 1 :])
