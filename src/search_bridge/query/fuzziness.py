"""Edit-distance tolerance for fuzzy matching."""

import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_LOW_DISTANCE = 3
DEFAULT_HIGH_DISTANCE = 6
VALID_EDITS = (0, 1, 2)


@dataclass(frozen=True)
class Fuzziness:
    """A pre-validated fuzziness setting.

    Either a fixed edit distance (0, 1 or 2) or ``AUTO``, which derives the
    distance from the term length: terms shorter than ``low`` must match
    exactly, terms shorter than ``high`` allow one edit, longer terms two.

    Attributes:
        edits: Fixed edit distance, or None for AUTO
        low: Term length at which one edit becomes allowed (AUTO only)
        high: Term length at which two edits become allowed (AUTO only)
    """

    edits: Optional[int] = None
    low: int = DEFAULT_LOW_DISTANCE
    high: int = DEFAULT_HIGH_DISTANCE

    def __post_init__(self):
        if self.edits is not None and self.edits not in VALID_EDITS:
            raise ValueError(f"Valid edit distances are {list(VALID_EDITS)} but was [{self.edits}]")
        if self.low < 0 or self.high < self.low:
            raise ValueError(
                f"fuzziness wrongly configured, must be: lowDistance > 0, highDistance"
                f" >= lowDistance but was [{self.low},{self.high}]"
            )

    @classmethod
    def auto(cls, low: int = DEFAULT_LOW_DISTANCE, high: int = DEFAULT_HIGH_DISTANCE) -> "Fuzziness":
        return cls(edits=None, low=low, high=high)

    @classmethod
    def from_edits(cls, edits: int) -> "Fuzziness":
        return cls(edits=edits)

    @classmethod
    def from_string(cls, value: str) -> "Fuzziness":
        """Parse ``AUTO``, ``AUTO:low,high`` or a whole-number edit distance.

        Raises:
            ValueError: If the string is empty or not a valid fuzziness
        """
        if not value or not value.strip():
            raise ValueError("fuzziness cannot be null or empty.")

        upper = value.strip().upper()
        if upper == "AUTO":
            return cls.auto()
        if upper.startswith("AUTO:"):
            return cls._parse_custom_auto(upper)

        try:
            distance = float(upper)
        except ValueError:
            raise ValueError(f"Invalid fuzziness value: {value}") from None
        if not math.isfinite(distance) or distance % 1 > 0:
            raise ValueError(f"fuzziness needs to be one of 0.0, 1.0 or 2.0 but was {distance}")
        return cls.from_edits(int(distance))

    @classmethod
    def _parse_custom_auto(cls, value: str) -> "Fuzziness":
        bounds = value[len("AUTO:") :].split(",")
        if len(bounds) != 2:
            raise ValueError(f"failed to find low and high distance values in [{value}]")
        try:
            low, high = int(bounds[0]), int(bounds[1])
        except ValueError:
            raise ValueError(f"failed to parse low and high distance values in [{value}]") from None
        return cls.auto(low, high)

    @property
    def is_auto(self) -> bool:
        return self.edits is None

    def as_edits(self, term: str = "") -> int:
        """Resolve the edit distance allowed for ``term``."""
        if self.edits is not None:
            return self.edits
        if len(term) < self.low:
            return 0
        if len(term) < self.high:
            return 1
        return 2

    def __str__(self) -> str:
        if self.edits is not None:
            return str(self.edits)
        if (self.low, self.high) == (DEFAULT_LOW_DISTANCE, DEFAULT_HIGH_DISTANCE):
            return "AUTO"
        return f"AUTO:{self.low},{self.high}"
