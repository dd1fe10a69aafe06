"""Configuration settings for compassrule."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

MIN_DISTANCE = 20.0


class SnappingConfig(BaseModel):
    """Configuration for pointer snapping and point reuse."""

    min_distance: float = Field(
        default=MIN_DISTANCE,
        ge=1.0,
        le=200.0,
        description="Proximity threshold for snapping onto curves, intersections and existing points",
    )


class RenderConfig(BaseModel):
    """Sizes used to keep bounding boxes consistent with the rendered markers.

    The renderer itself is external; these values only decide the bounding
    geometry written back onto entities when they are mutated.
    """

    point_sizes: dict[int, tuple[float, float]] = Field(
        default_factory=lambda: {1: (3.0, 7.0), 2: (4.0, 9.0), 3: (5.0, 11.0)},
        description="Half and full marker size for each point size level",
    )
    angle_size: float = Field(
        default=50.0,
        gt=0.0,
        description="Half extent of the box around an angle marker",
    )

    @field_validator("point_sizes")
    @classmethod
    def _require_default_level(
        cls, value: dict[int, tuple[float, float]]
    ) -> dict[int, tuple[float, float]]:
        if 1 not in value:
            raise ValueError("point_sizes must define level 1")
        return value

    def point_size(self, level: int) -> tuple[float, float]:
        """Get (half, full) marker size, falling back to level 1."""
        return self.point_sizes.get(level, self.point_sizes[1])


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file (no file logging when unset)",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )
    quiet: bool = Field(
        default=True,
        description="Suppress console logging except errors",
    )


class CompassruleSettings(BaseModel):
    """Main application settings."""

    snapping: SnappingConfig = Field(default_factory=SnappingConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> CompassruleSettings:
    """Get default application settings."""
    return CompassruleSettings()
