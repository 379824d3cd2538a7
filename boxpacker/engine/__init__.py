"""Engine Layer - Box resolution core

This module provides the resolution engine:
- PackingOrchestrator: Main entry point (cache → paginated batch scan)
- ResilientPackabilityChecker: API first, local fallback on unavailability
- FallbackPackabilityChecker: Local volume/weight heuristic
- CacheAdapter: Content-addressed result cache
- CheckResult: Tagged packability result
- ExecutionStrategy: API/fallback path selection
"""

from .bisection import find_first_fitting
from .cache_adapter import CacheAdapter
from .fallback import FallbackPackabilityChecker
from .models import Box, Product
from .orchestrator import PackingOrchestrator, ResolutionState
from .requirements import Requirement, aggregate_requirements
from .resilience import ForcedFallbackChecker, ResilientPackabilityChecker
from .result import CheckResult, CheckStatus
from .strategy import ExecutionPath, ExecutionStrategy

__all__ = [
    "PackingOrchestrator",
    "ResolutionState",
    "ResilientPackabilityChecker",
    "ForcedFallbackChecker",
    "FallbackPackabilityChecker",
    "CacheAdapter",
    "CheckResult",
    "CheckStatus",
    "ExecutionStrategy",
    "ExecutionPath",
    "Product",
    "Box",
    "Requirement",
    "aggregate_requirements",
    "find_first_fitting",
]
