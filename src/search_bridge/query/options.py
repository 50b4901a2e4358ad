"""
Option registry for match queries.

Maps each recognized option name to a coercion and a builder setter. The
registry is built once at import time and exposed read-only, so it can be
shared by any number of concurrent query constructions and inspected to
describe the supported options.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from loguru import logger

from search_bridge.errors import OptionValueInvalidError, UnrecognizedOptionError
from search_bridge.query.builder import MatchQueryBuilder
from search_bridge.query.fuzziness import Fuzziness
from search_bridge.query.operator import Operator

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def parse_boolean(value: str) -> bool:
    """Strict boolean parsing: only ``true`` and ``false`` are accepted."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"Failed to parse value [{value}] as only [true] or [false] are allowed.")


def parse_integer(value: str) -> int:
    """Parse an optionally signed decimal 32-bit integer."""
    if not INTEGER_PATTERN.fullmatch(value):
        raise ValueError(f'For input string: "{value}"')
    parsed = int(value)
    if not INT_MIN <= parsed <= INT_MAX:
        raise ValueError(f'For input string: "{value}" (out of integer range)')
    return parsed


def parse_float(value: str) -> float:
    """Parse a finite decimal float such as ``2``, ``-0.5`` or ``1e-3``."""
    if not FLOAT_PATTERN.fullmatch(value):
        raise ValueError(f'For input string: "{value}"')
    parsed = float(value)
    if not math.isfinite(parsed):
        raise ValueError(f'For input string: "{value}" (out of float range)')
    return parsed


def parse_string(value: str) -> str:
    return value


class OptionKind(Enum):
    """Coercion applied to the raw string value of an option."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    FUZZINESS = "fuzziness"
    OPERATOR = "operator"

    def coerce(self, raw: str) -> Any:
        return _COERCERS[self](raw)


_COERCERS: dict[OptionKind, Callable[[str], Any]] = {
    OptionKind.STRING: parse_string,
    OptionKind.BOOLEAN: parse_boolean,
    OptionKind.INTEGER: parse_integer,
    OptionKind.FLOAT: parse_float,
    OptionKind.FUZZINESS: Fuzziness.from_string,
    OptionKind.OPERATOR: Operator.from_string,
}


@dataclass(frozen=True)
class OptionSpec:
    """One registry entry: an option name bound to a coercion and a setter."""

    name: str
    kind: OptionKind
    setter: Callable[[MatchQueryBuilder, Any], Any]
    description: str = ""

    def apply(self, builder: MatchQueryBuilder, raw: str) -> None:
        """Coerce ``raw`` and apply it to ``builder``.

        Raises:
            OptionValueInvalidError: If coercion or the setter's validation fails
        """
        if not isinstance(raw, str):
            raise OptionValueInvalidError(
                self.name, str(raw), self.kind.value, f"expected a string but got {type(raw).__name__}"
            )
        try:
            value = self.kind.coerce(raw)
            self.setter(builder, value)
        except (ValueError, TypeError) as exc:
            raise OptionValueInvalidError(self.name, str(raw), self.kind.value, str(exc)) from exc


def _build_registry(specs: Iterable[OptionSpec]) -> Mapping[str, OptionSpec]:
    registry: dict[str, OptionSpec] = {}
    for spec in specs:
        if spec.name in registry:
            raise ValueError(f"Duplicate match option [{spec.name}]")
        registry[spec.name] = spec
    return MappingProxyType(registry)


# TODO: support zero_terms_query once its accepted values ("none", "all") are modelled
MATCH_OPTIONS: Mapping[str, OptionSpec] = _build_registry(
    [
        OptionSpec(
            "analyzer",
            OptionKind.STRING,
            MatchQueryBuilder.set_analyzer,
            "Analyzer used to convert the query text into terms",
        ),
        OptionSpec(
            "auto_generate_synonyms_phrase_query",
            OptionKind.BOOLEAN,
            MatchQueryBuilder.set_auto_generate_synonyms_phrase_query,
            "Create phrase queries for multi-term synonyms",
        ),
        OptionSpec(
            "fuzziness",
            OptionKind.FUZZINESS,
            MatchQueryBuilder.set_fuzziness,
            "Maximum edit distance allowed for matching",
        ),
        OptionSpec(
            "boost",
            OptionKind.FLOAT,
            MatchQueryBuilder.set_boost,
            "Relevance score multiplier",
        ),
        OptionSpec(
            "fuzzy_transpositions",
            OptionKind.BOOLEAN,
            MatchQueryBuilder.set_fuzzy_transpositions,
            "Count a transposition of two adjacent characters as one edit",
        ),
        OptionSpec(
            "fuzzy_rewrite",
            OptionKind.STRING,
            MatchQueryBuilder.set_fuzzy_rewrite,
            "Method used to rewrite the fuzzy query",
        ),
        OptionSpec(
            "lenient",
            OptionKind.BOOLEAN,
            MatchQueryBuilder.set_lenient,
            "Ignore format-based errors such as text for a numeric field",
        ),
        OptionSpec(
            "max_expansions",
            OptionKind.INTEGER,
            MatchQueryBuilder.set_max_expansions,
            "Maximum number of terms the fuzzy query expands to",
        ),
        OptionSpec(
            "minimum_should_match",
            OptionKind.STRING,
            MatchQueryBuilder.set_minimum_should_match,
            "Minimum number of clauses that must match",
        ),
        OptionSpec(
            "operator",
            OptionKind.OPERATOR,
            MatchQueryBuilder.set_operator,
            "Boolean logic used to combine terms (AND or OR)",
        ),
        OptionSpec(
            "prefix_length",
            OptionKind.INTEGER,
            MatchQueryBuilder.set_prefix_length,
            "Number of leading characters left unchanged for fuzzy matching",
        ),
    ]
)


def lookup_option(name: str) -> Optional[OptionSpec]:
    """Return the registry entry for ``name``, or None if it is not recognized."""
    return MATCH_OPTIONS.get(name)


def describe_options() -> list[tuple[str, str, str]]:
    """List ``(name, kind, description)`` rows for every recognized option."""
    return [(spec.name, spec.kind.value, spec.description) for spec in MATCH_OPTIONS.values()]


def apply_options(builder: MatchQueryBuilder, options: Mapping[str, str]) -> MatchQueryBuilder:
    """Apply every option in ``options`` to ``builder``.

    Raises:
        UnrecognizedOptionError: If an option name is not in the registry
        OptionValueInvalidError: If an option value cannot be coerced or applied
    """
    # Names are checked before any value, so an unknown option wins over a bad value
    specs = []
    for key, raw in options.items():
        spec = lookup_option(key)
        if spec is None:
            logger.warning(f"Rejecting unrecognized match option [{key}]")
            raise UnrecognizedOptionError(key)
        specs.append((spec, raw))

    for spec, raw in specs:
        spec.apply(builder, raw)
        logger.trace(f"Applied match option {spec.name}={raw!r}")
    return builder
