"""Boolean operator used to combine the terms of an analyzed match query."""

from enum import Enum


class Operator(Enum):
    """How analyzed terms are combined."""

    AND = "AND"
    OR = "OR"

    @classmethod
    def from_string(cls, value: str) -> "Operator":
        """Parse an operator name, ignoring case."""
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(
                f"No operator found for [{value}], expected one of {[op.value for op in cls]}"
            ) from None

    def __str__(self) -> str:
        return self.value
