"""Immutable description of a match query prior to serialization."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from loguru import logger

from search_bridge.query.builder import MatchQueryBuilder
from search_bridge.query.fuzziness import Fuzziness
from search_bridge.query.options import apply_options

_NO_OPTIONS: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class MatchOptions:
    """Parameters given as an open string-keyed option bag."""

    options: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for key in self.options:
            if not isinstance(key, str):
                raise TypeError(f"match option names must be strings, got {key!r}")
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def __hash__(self) -> int:
        return hash(frozenset(self.options.items()))


@dataclass(frozen=True)
class MatchTuning:
    """Parameters given as first-class boost and fuzziness values."""

    boost: Optional[float] = None
    fuzziness: Optional[Fuzziness] = None


MatchParameters = Union[MatchOptions, MatchTuning]


@dataclass(frozen=True)
class MatchQuery:
    """A match query against one field.

    The parameters are either an option bag or an explicit boost/fuzziness
    pair, never both. Equality and hashing are structural; option order does
    not matter.
    """

    field_name: str
    text: Any
    parameters: MatchParameters = field(default_factory=MatchOptions)

    @classmethod
    def with_options(
        cls, field_name: str, text: Any, options: Optional[Mapping[str, str]] = None
    ) -> "MatchQuery":
        return cls(field_name, text, MatchOptions(options or {}))

    @classmethod
    def with_tuning(
        cls,
        field_name: str,
        text: Any,
        boost: Optional[float] = None,
        fuzziness: Optional[Fuzziness] = None,
    ) -> "MatchQuery":
        return cls(field_name, text, MatchTuning(boost, fuzziness))

    @property
    def options(self) -> Mapping[str, str]:
        if isinstance(self.parameters, MatchOptions):
            return self.parameters.options
        return _NO_OPTIONS

    @property
    def boost(self) -> Optional[float]:
        if isinstance(self.parameters, MatchTuning):
            return self.parameters.boost
        return None

    @property
    def fuzziness(self) -> Optional[Fuzziness]:
        if isinstance(self.parameters, MatchTuning):
            return self.parameters.fuzziness
        return None

    def as_builder(self) -> MatchQueryBuilder:
        """Create a fresh builder configured from this query.

        Each call returns a new builder; the query itself is never modified.
        Any failure aborts construction, so a partially configured builder
        never escapes.

        Raises:
            UnrecognizedOptionError: If an option name is not recognized
            OptionValueInvalidError: If an option value is invalid
        """
        builder = MatchQueryBuilder(self.field_name, self.text)
        match self.parameters:
            case MatchOptions(options=options):
                apply_options(builder, options)
            case MatchTuning(boost=boost, fuzziness=fuzziness):
                if boost is not None:
                    builder.set_boost(boost)
                if fuzziness is not None:
                    builder.set_fuzziness(fuzziness)
            case _:  # pragma: no cover
                raise TypeError(f"Unexpected match parameters: {self.parameters!r}")

        logger.debug(f"Built match query for field {self.field_name!r}")
        return builder

    def __str__(self) -> str:
        return f"{self.field_name}:{self.text}"


def build_match_query(
    field_name: str,
    text: Any,
    options: Optional[Mapping[str, str]] = None,
    *,
    boost: Optional[float] = None,
    fuzziness: Optional[Fuzziness] = None,
) -> MatchQueryBuilder:
    """Build a ready-to-serialize match query.

    Pass either ``options`` or ``boost``/``fuzziness``; mixing the two is an
    error.

    Raises:
        ValueError: If options are combined with boost or fuzziness
        UnrecognizedOptionError: If an option name is not recognized
        OptionValueInvalidError: If an option value is invalid
    """
    if options and (boost is not None or fuzziness is not None):
        raise ValueError("options cannot be combined with explicit boost or fuzziness")

    if boost is not None or fuzziness is not None:
        query = MatchQuery.with_tuning(field_name, text, boost, fuzziness)
    else:
        query = MatchQuery.with_options(field_name, text, options)
    return query.as_builder()
