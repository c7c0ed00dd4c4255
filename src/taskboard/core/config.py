"""Configuration management for taskboard.

Settings are read from environment variables with the ``TASKBOARD_`` prefix
(and an optional ``.env`` file) using Pydantic Settings.
"""

from __future__ import annotations

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskboard.core.types import DEFAULT_COLUMNS


class BoardConfig(BaseSettings):
    """Main configuration for the board service.

    Example:
        ```python
        # Using environment variables
        # TASKBOARD_DATABASE_URL=postgresql+asyncpg://...
        # TASKBOARD_COLUMN_REORDER_STRICT=true

        config = BoardConfig()

        # Or programmatically
        config = BoardConfig(
            database_url="sqlite+aiosqlite:///:memory:",
            default_columns=["Backlog", "Doing", "Done"],
        )
        ```

    Attributes:
        database_url: Async SQLAlchemy connection URL
        default_columns: Columns given to projects created without any
        column_reorder_strict: Require column reorders to be permutations
        debug_errors: Include exception details in error responses
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __str__(self) -> str:
        """String representation with masked credentials."""
        result = super().__repr__()
        return re.sub(r"://([^:]+):([^@]+)@", r"://\1:***@", result)

    ##########################
    # Database Configuration #
    ##########################

    database_url: str = Field(
        default="sqlite+aiosqlite:///./taskboard.db",
        description="Async SQLAlchemy database URL",
    )

    database_pool_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Database connection pool size (ignored for SQLite)",
    )

    database_max_overflow: int = Field(
        default=20,
        ge=0,
        le=200,
        description="Max overflow connections beyond pool size",
    )

    database_pool_recycle: int = Field(
        default=3600,
        ge=60,
        description="Connection recycle time in seconds",
    )

    database_echo: bool = Field(
        default=False,
        description="Enable SQL statement logging (development only)",
    )

    ##################
    # Board Behavior #
    ##################

    default_columns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COLUMNS),
        description="Columns assigned to projects created without columns",
    )

    column_reorder_strict: bool = Field(
        default=False,
        description="Reject column reorders that are not a permutation of the current columns",
    )

    #################
    # HTTP Settings #
    #################

    debug_errors: bool = Field(
        default=False,
        description="Expose exception details in error responses",
    )

    skip_log_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Path prefixes the request logger stays quiet about",
    )

    ##############
    # Validators #
    ##############

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Normalise the URL and warn about synchronous driver schemes.

        Args:
            v: Database URL to validate

        Returns:
            Validated URL string without a trailing slash
        """
        import warnings

        from taskboard.utils.db_compat import detect_dialect

        url_str = str(v).rstrip("/")
        detect_dialect(url_str)

        _SYNC_ONLY_SCHEMES = ("postgresql://", "sqlite://", "mysql://")
        if any(url_str.startswith(s) for s in _SYNC_ONLY_SCHEMES):
            warnings.warn(
                "Database URL uses a synchronous driver scheme. "
                "Use an async driver instead (e.g. postgresql+asyncpg, sqlite+aiosqlite).",
                stacklevel=4,
            )
        return url_str

    @field_validator("default_columns")
    @classmethod
    def validate_default_columns(cls, v: list[str]) -> list[str]:
        """Default columns must be non-empty, unique strings.

        Raises:
            ValueError: If a name is blank or repeated
        """
        from taskboard.utils.validation import find_column_problem

        problem = find_column_problem(v) if v else "must not be empty"
        if problem:
            raise ValueError(f"default_columns {problem}")
        return v


__all__ = ["BoardConfig"]
