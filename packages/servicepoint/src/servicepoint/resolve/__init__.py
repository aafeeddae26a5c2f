"""Candidate ranking and resolution."""

from .candidates import build_candidates, compare_candidates, filter_and_build, rank_candidates
from .exceptions import CandidateOrderingError, ResolutionError
from .resolver import Resolver
from .result import ResolutionBranch, ResolutionResult

__all__ = [
    "CandidateOrderingError",
    "ResolutionBranch",
    "ResolutionError",
    "ResolutionResult",
    "Resolver",
    "build_candidates",
    "compare_candidates",
    "filter_and_build",
    "rank_candidates",
]
