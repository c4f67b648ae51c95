"""Domain exceptions for filter declaration and lookup."""


class DependentFilterError(Exception):
    """Base class for every error raised by this package."""


class FilterDefinitionError(DependentFilterError, ValueError):
    """A filter was declared with an invalid configuration."""


class DuplicateFilterKeyError(DependentFilterError):
    """Two filters of the same resource derive the same key."""

    def __init__(self, resource_key: str, filter_key: str) -> None:
        super().__init__(
            f"Resource '{resource_key}' declares filter key '{filter_key}' more than once"
        )
        self.resource_key = resource_key
        self.filter_key = filter_key


class DuplicateResourceError(DependentFilterError):
    """A resource key was registered twice."""


class ResourceNotFoundError(DependentFilterError, LookupError):
    """No resource is registered under the requested key."""


class FilterNotFoundError(DependentFilterError, LookupError):
    """The resource has no eligible filter under the requested key."""
