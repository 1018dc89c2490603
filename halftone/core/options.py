"""
Processing Options

Immutable settings shared by every job of one batch: contrast,
threshold, dithering algorithm, tone mode and the physical output size.
"""

import math
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Tuple

CM_PER_INCH = 2.54

MIN_CONTRAST = 0.8
MAX_CONTRAST = 2.0


class DitherMode(Enum):
    """Algorithms used to reduce luminance to black and white."""
    FLOYD_STEINBERG = "floyd"
    THRESHOLD = "binary"


class ToneMode(Enum):
    """What the pipeline produces for each image."""
    MONOCHROME = "bw"
    GRAYSCALE = "gray"
    COLOR = "color"


def _coerce_enum(enum_cls, value):
    """Accept an enum member, its value ("floyd") or its name ("FLOYD_STEINBERG")."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        pass
    try:
        return enum_cls[str(value).upper()]
    except KeyError:
        raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}") from None


@dataclass(frozen=True)
class ProcessingOptions:
    """
    Options for one batch run.

    Attributes:
        contrast: Multiplicative factor about the midpoint 128 (0.8 - 2.0)
        threshold: Black/white split point (0 - 255)
        mode: Dithering algorithm used in monochrome mode
        tone_mode: Monochrome, grayscale or color passthrough
        output_width_cm: Target printed width in centimetres
        print_dpi: Output resolution in dots per inch
    """
    contrast: float = 1.0
    threshold: float = 128
    mode: DitherMode = DitherMode.FLOYD_STEINBERG
    tone_mode: ToneMode = ToneMode.MONOCHROME
    output_width_cm: float = 10.0
    print_dpi: float = 300

    def __post_init__(self):
        # Frozen, so coerce through object.__setattr__
        object.__setattr__(self, "mode", _coerce_enum(DitherMode, self.mode))
        object.__setattr__(self, "tone_mode", _coerce_enum(ToneMode, self.tone_mode))

    def validate(self) -> Tuple[bool, str]:
        """
        Validate option ranges.

        Returns:
            Tuple of (is_valid, error_message)
        """
        numeric = {
            "contrast": self.contrast,
            "threshold": self.threshold,
            "output_width_cm": self.output_width_cm,
            "print_dpi": self.print_dpi,
        }
        for name, value in numeric.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return False, f"{name} must be a number"
            if not math.isfinite(value):
                return False, f"{name} must be finite"

        if not MIN_CONTRAST <= self.contrast <= MAX_CONTRAST:
            return False, (
                f"Contrast {self.contrast} outside "
                f"{MIN_CONTRAST} - {MAX_CONTRAST}"
            )

        if not 0 <= self.threshold <= 255:
            return False, f"Threshold {self.threshold} outside 0 - 255"

        if self.output_width_cm <= 0:
            return False, "Output width must be positive"

        if self.print_dpi <= 0:
            return False, "Print DPI must be positive"

        return True, ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mode"] = self.mode.value
        data["tone_mode"] = self.tone_mode.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProcessingOptions":
        """Build options from a dict, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
