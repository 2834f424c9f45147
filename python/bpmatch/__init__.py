"""
Maximum-cardinality and maximum-weight matching in bipartite graphs.
"""

__all__ = ["Index",
           "MaxMatch",
           "Hungarian",
           "UNMATCHED",
           "MatchingError",
           "maximum_cardinality_matching",
           "maximum_weight_assignment",
           "verify_maximum_matching",
           "verify_optimum",
           "pad_weights",
           "adjust_weights_for_minimum_cost"]

from .errors import MatchingError
from .hungarian import Hungarian, maximum_weight_assignment, verify_optimum
from .index import Index
from .maxmatch import (UNMATCHED,
                       MaxMatch,
                       maximum_cardinality_matching,
                       verify_maximum_matching)
from .weights import adjust_weights_for_minimum_cost, pad_weights
