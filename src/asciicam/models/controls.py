"""
Render Controls
===============

Pydantic model for the user-facing render controls.

These are the inputs the UI layer (CLI flags, control API) hands to the
pipeline each tick. The model is deliberately lenient about numbers:
the sampler clamps column counts and defaults bad densities, so values
such as `columns=9000` or `density=0` are accepted here and normalized
later. The one thing rejected outright is an empty ramp, because the
renderer assumes a non-empty one.

Example:
    controls = RenderControls(columns=160, charset="blocks", invert=True)
    print(controls.ramp)  # " ░▒▓█"
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


# Ramps ordered from least to most visually dense
CHARSETS: Dict[str, str] = {
    "standard": " .:-=+*#%@",
    "blocks": " ░▒▓█",
    "detailed": " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$",
    "binary": " #",
}


def resolve_ramp(charset: str) -> str:
    """Return the ramp for a preset name, or the charset itself as a literal ramp."""
    return CHARSETS.get(charset, charset)


def format_density(density: float) -> str:
    """Format a density factor for display, e.g. 1.2 -> '1.2x'."""
    return f"{density:.1f}x"


class RenderControls(BaseModel):
    """
    Render controls snapshot, read fresh at the start of each tick.

    Attributes:
        columns: Base column count (None or 0 -> default)
        density: Multiplier on columns (None or non-positive -> 1.0)
        charset: Preset name from CHARSETS or a literal ramp
        invert: Map bright regions to the sparse end of the ramp
        char_aspect: Glyph height/width ratio
    """

    columns: Optional[float] = Field(
        default=120,
        description="Base column count, clamped to [40, 240]",
    )
    density: Optional[float] = Field(
        default=1.0,
        description="Density factor applied to columns",
    )
    charset: str = Field(
        default="standard",
        min_length=1,
        description="Preset name or literal ramp, sparse to dense",
    )
    invert: bool = Field(default=False, description="Invert luminance")
    char_aspect: float = Field(
        default=2.0,
        gt=0,
        description="Character aspect correction",
    )

    @field_validator("columns", "density", mode="before")
    @classmethod
    def _lenient_number(cls, value: Any) -> Any:
        """Map unparseable numbers to None so the sampler applies its default."""
        if value is None or isinstance(value, (int, float)):
            return value
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @property
    def ramp(self) -> str:
        """The character ramp these controls select."""
        return resolve_ramp(self.charset)

    @property
    def density_label(self) -> str:
        """Label of the density the sampler actually applies."""
        from asciicam.pipeline.sampler import normalize_density

        return format_density(normalize_density(self.density))
