"""Custom exceptions for the chainify library.

Structural problems (duplicate or unknown paths, malformed route fields)
are raised while the route tree is built. Problems met while a chain runs
(missing stored values, failing handlers) are delivered through the
session's completion future instead.
"""

from chainify._internal.exceptions import (
    BaseChainifyError,
    DuplicatePathError,
    InvalidRouteError,
    MissingDependencyError,
    NotFoundError,
)

__all__ = (
    "BaseChainifyError",
    "DuplicatePathError",
    "InvalidRouteError",
    "MissingDependencyError",
    "NotFoundError",
)
