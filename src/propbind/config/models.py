"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PROPBIND__SECTION__KEY)
3. YAML config file passed to load_config()
4. Built-in defaults (this file)

Environment Variable Format:
    PROPBIND__<SECTION>__<KEY>=<VALUE>

Examples:
    PROPBIND__LOGGING__LEVEL=DEBUG
    PROPBIND__BINDING__MISSING_PROPERTY=ignore
    PROPBIND__BINDING__BYPASS_VISIBILITY=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
MissingPropertyPolicy = Literal["raise", "ignore"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PROPBIND__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every resolved accessor and write.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class BindingConfig(BaseModel):
    """Property binding behavior.

    Env vars:
        PROPBIND__BINDING__BYPASS_VISIBILITY: Locate and write private/frozen fields
        PROPBIND__BINDING__UNWRAP_OPTIONAL: Treat Optional[X] as X during resolution
        PROPBIND__BINDING__MISSING_PROPERTY: raise | ignore when try_set finds no accessor
        PROPBIND__BINDING__CACHE_SIZE: Max memoized (class, property) lookups
    """

    bypass_visibility: bool = Field(
        default=True,
        description="Locate name-mangled private fields and fields of frozen dataclasses, "
        "and write fields with object.__setattr__. Disable to honor __setattr__ guards.",
    )
    unwrap_optional: bool = Field(
        default=True,
        description="Normalize Optional[X] / X | None to X before resolving types.",
    )
    missing_property: MissingPropertyPolicy = Field(
        default="raise",
        description="try_set behavior when no accessor exists. "
        "'raise' fails fast with an internal error; 'ignore' is a logged no-op.",
    )
    cache_size: int = Field(
        default=1024,
        description="Max entries in the accessor and binding-map caches. 0 disables caching.",
    )

    @field_validator("cache_size")
    @classmethod
    def validate_cache_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"cache_size must be >= 0, got {v}")
        return v


class PropBindConfig(BaseModel):
    """Root configuration for PropBind.

    All settings can be configured via:
    1. Environment variables: PROPBIND__SECTION__KEY
    2. A YAML config file
    3. Direct kwargs to load_config()
    """

    binding: BindingConfig = Field(default_factory=BindingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
