"""Changeset configuration using pydantic-settings."""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain import MissingConfigurationError
from .transaction import TransactionRunner

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ChangesetConfiguration(BaseSettings):
    """Configuration for pushing changesets.

    There is no process-wide instance: a configuration is passed to a
    Changeset when it is created, or to ``Changeset.push`` directly. Values
    that can be expressed as strings are read from environment variables
    with the CHANGESET_ prefix, for example:
    - CHANGESET_LOG_LEVEL=INFO

    Attributes:
        transaction_runner: Runner wrapping the commit phase of a push.
            Has no default; pushing without one raises
            MissingConfigurationError.
        log_level: Level of the push lifecycle log records. Case-insensitive.

    Example:
        >>> config = ChangesetConfiguration(
        ...     transaction_runner=ContextManagerTransactionRunner(session.begin),
        ... )
        >>> Changeset(catalog, configuration=config).add_operation(op).push()
    """

    transaction_runner: TransactionRunner | None = None
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_prefix="CHANGESET_", arbitrary_types_allowed=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(f"log_level must be one of {', '.join(_LEVEL_NAMES)}")
        return level

    @property
    def level(self) -> int:
        """Numeric logging level for ``log_level``."""
        return getattr(logging, self.log_level)

    def resolve_transaction_runner(self) -> TransactionRunner:
        """Get the configured transaction runner.

        Raises:
            MissingConfigurationError: If no runner was configured.
        """
        if self.transaction_runner is None:
            raise MissingConfigurationError("transaction_runner")
        return self.transaction_runner
