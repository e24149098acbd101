class BaseChainifyError(Exception):
    pass


class DuplicatePathError(BaseChainifyError):
    """A route with this path has already been added to the tree."""

    def __init__(self, path: str) -> None:
        self.path: str = path
        super().__init__(f"A route with the path {path!r} already exists.")


class NotFoundError(BaseChainifyError, LookupError):
    """No route is registered under the requested path."""

    def __init__(self, path: str) -> None:
        self.path: str = path
        super().__init__(f"No such route exists with path {path!r}.")


class MissingDependencyError(BaseChainifyError, LookupError):
    """A step asked for a value that was never stored in the session."""

    def __init__(self, name: str) -> None:
        self.name: str = name
        msg = (
            f"Value of {name!r} is not defined. Store it with a preceding "
            "step (store_result_as) or pass it in the default storage."
        )
        super().__init__(msg)


class InvalidRouteError(BaseChainifyError, TypeError):
    """A route descriptor field has the wrong type or is unknown."""

    def __init__(self, field: str, reason: str) -> None:
        self.field: str = field
        self.reason: str = reason
        super().__init__(f"Invalid route field {field!r}: {reason}")
