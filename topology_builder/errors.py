"""Exceptions raised while building a network topology."""


class TopologyError(Exception):
    """Base class for all topology build failures."""


class ValidationError(TopologyError):
    """The topology request cannot be built as given."""


class ProvisioningError(TopologyError):
    """A provisioner failed to create a single resource."""

    def __init__(self, kind, name, message):
        super().__init__(f"failed to create {kind} {name!r}: {message}")
        self.kind = kind
        self.name = name


class ResourceCreationError(TopologyError):
    """A build step failed while creating its resources.

    The underlying ``ProvisioningError`` is available as ``cause`` and is
    also chained as ``__cause__``.
    """

    def __init__(self, context, cause):
        super().__init__(f"{context}: {cause}")
        self.context = context
        self.cause = cause
