from src.lottery_simulator.demand_estimator import DemandEstimator, estimate_demand
from src.lottery_simulator.lottery_engine import LotteryEngine, run_simulation
from src.lottery_simulator.models import (
    DemandProfile,
    OverallResult,
    PriorityTier,
    RankedChoice,
    SimulationResult,
    TrialOutcome,
    TrialStatus,
)
from src.lottery_simulator.ranked_list import RankedApplication
from src.lottery_simulator.validation import InvalidInputError, parse_priority_tier

__all__ = [
    "DemandEstimator",
    "DemandProfile",
    "InvalidInputError",
    "LotteryEngine",
    "OverallResult",
    "PriorityTier",
    "RankedApplication",
    "RankedChoice",
    "SimulationResult",
    "TrialOutcome",
    "TrialStatus",
    "estimate_demand",
    "parse_priority_tier",
    "run_simulation",
]
