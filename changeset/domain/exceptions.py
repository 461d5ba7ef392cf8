"""Exceptions raised while building and pushing changesets."""


class ChangesetError(Exception):
    """Base class for every error raised by the changeset package."""

    pass


class UnknownEventError(ChangesetError):
    """Raised when an event name is not recognized by the event catalog.

    This is raised synchronously by ``Changeset.add_event`` before anything is
    queued, and by the null catalog for any dispatch attempt.
    """

    pass


class MissingConfigurationError(ChangesetError):
    """Raised when a required configuration value has not been set.

    The message is the name of the missing setting (e.g.
    ``"transaction_runner"``).
    """

    pass


class InconsistencyError(ChangesetError):
    """Raised when a lazily merged producer does not yield a Changeset."""

    pass


class InvalidStateError(ChangesetError):
    """Raised when a changeset is modified or pushed after it left building."""

    pass
