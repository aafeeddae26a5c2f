# servicepoint/conf/models.py

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServicePointSettings(BaseModel):
    """Validated view of the effective settings of one app."""

    model_config = ConfigDict(extra="allow", frozen=True)

    ALLOW_OVERRIDE: bool = True
    STRICT_ACCESSORS: bool = False
    TRACE_ROUTING: bool = True
    DISCOVERY_MODULES: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("DISCOVERY_MODULES", mode="before")
    @classmethod
    def _split_modules(cls, value):
        # "a.b, c.d" from env-style configuration
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value
