"""Mutable builder for a full-text match query."""

import math
from dataclasses import dataclass
from typing import Any, Optional

from search_bridge.query.fuzziness import Fuzziness
from search_bridge.query.operator import Operator

DEFAULT_BOOST = 1.0
DEFAULT_MAX_EXPANSIONS = 50
DEFAULT_PREFIX_LENGTH = 0


@dataclass
class MatchQueryBuilder:
    """A match query under construction.

    Every ``set_*`` method validates its argument, mutates the builder and
    returns it, so setters can be chained. Setters never read each other's
    state, which keeps the final configuration independent of the order in
    which they are applied.
    """

    field_name: str
    text: Any
    analyzer: Optional[str] = None
    auto_generate_synonyms_phrase_query: bool = True
    fuzziness: Optional[Fuzziness] = None
    boost: float = DEFAULT_BOOST
    fuzzy_transpositions: bool = True
    fuzzy_rewrite: Optional[str] = None
    lenient: bool = False
    max_expansions: int = DEFAULT_MAX_EXPANSIONS
    minimum_should_match: Optional[str] = None
    operator: Operator = Operator.OR
    prefix_length: int = DEFAULT_PREFIX_LENGTH

    def __post_init__(self):
        if not self.field_name:
            raise ValueError("[match] requires fieldName")
        if self.text is None:
            raise ValueError("[match] requires query value")

    def set_analyzer(self, analyzer: str) -> "MatchQueryBuilder":
        self.analyzer = analyzer
        return self

    def set_auto_generate_synonyms_phrase_query(self, enabled: bool) -> "MatchQueryBuilder":
        self.auto_generate_synonyms_phrase_query = enabled
        return self

    def set_fuzziness(self, fuzziness: Fuzziness) -> "MatchQueryBuilder":
        if fuzziness is None:
            raise ValueError("fuzziness cannot be null")
        self.fuzziness = fuzziness
        return self

    def set_boost(self, boost: float) -> "MatchQueryBuilder":
        boost = float(boost)
        if not math.isfinite(boost):
            raise ValueError(f"[match] requires boost to be a finite number but was [{boost}]")
        self.boost = boost
        return self

    def set_fuzzy_transpositions(self, enabled: bool) -> "MatchQueryBuilder":
        self.fuzzy_transpositions = enabled
        return self

    def set_fuzzy_rewrite(self, rewrite: str) -> "MatchQueryBuilder":
        self.fuzzy_rewrite = rewrite
        return self

    def set_lenient(self, lenient: bool) -> "MatchQueryBuilder":
        self.lenient = lenient
        return self

    def set_max_expansions(self, max_expansions: int) -> "MatchQueryBuilder":
        if max_expansions <= 0:
            raise ValueError("[match] requires maxExpansions to be positive.")
        self.max_expansions = max_expansions
        return self

    def set_minimum_should_match(self, minimum_should_match: str) -> "MatchQueryBuilder":
        self.minimum_should_match = minimum_should_match
        return self

    def set_operator(self, operator: Operator) -> "MatchQueryBuilder":
        if operator is None:
            raise ValueError("[match] requires operator to be non-null")
        self.operator = operator
        return self

    def set_prefix_length(self, prefix_length: int) -> "MatchQueryBuilder":
        if prefix_length < 0:
            raise ValueError("[match] requires prefix length to be non-negative.")
        self.prefix_length = prefix_length
        return self

    def to_dict(self) -> dict[str, Any]:
        """Render the query body, e.g. ``{"match": {"title": {"query": "...", ...}}}``."""
        body: dict[str, Any] = {
            "query": self.text,
            "operator": self.operator.value,
        }
        if self.analyzer is not None:
            body["analyzer"] = self.analyzer
        if self.fuzziness is not None:
            body["fuzziness"] = str(self.fuzziness)
        body["prefix_length"] = self.prefix_length
        body["max_expansions"] = self.max_expansions
        body["fuzzy_transpositions"] = self.fuzzy_transpositions
        if self.fuzzy_rewrite is not None:
            body["fuzzy_rewrite"] = self.fuzzy_rewrite
        if self.minimum_should_match is not None:
            body["minimum_should_match"] = self.minimum_should_match
        body["lenient"] = self.lenient
        body["auto_generate_synonyms_phrase_query"] = self.auto_generate_synonyms_phrase_query
        body["boost"] = self.boost
        return {"match": {self.field_name: body}}
