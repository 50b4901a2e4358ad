"""
Option-driven construction of full-text match queries.
"""

from search_bridge.query.builder import MatchQueryBuilder
from search_bridge.query.fuzziness import Fuzziness
from search_bridge.query.match_query import (
    MatchOptions,
    MatchParameters,
    MatchQuery,
    MatchTuning,
    build_match_query,
)
from search_bridge.query.operator import Operator
from search_bridge.query.options import (
    MATCH_OPTIONS,
    OptionKind,
    OptionSpec,
    apply_options,
    describe_options,
    lookup_option,
)

__all__ = [
    # Builder
    "MatchQueryBuilder",
    "Fuzziness",
    "Operator",
    # Query description
    "MatchQuery",
    "MatchOptions",
    "MatchTuning",
    "MatchParameters",
    "build_match_query",
    # Option registry
    "MATCH_OPTIONS",
    "OptionKind",
    "OptionSpec",
    "apply_options",
    "describe_options",
    "lookup_option",
]
