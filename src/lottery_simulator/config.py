# Monte Carlo parameters
DEFAULT_NUM_TRIALS = 1000
MAX_RANKED_CHOICES = 12  # Application policy cap

# Priority tiers: processing order within a school's applicant pool (1 = first)
PRIORITY_TIER_RANKS = {
    "sibling": 1,
    "zoned": 2,
    "district": 3,
    "borough": 4,
    "citywide": 5,
}

# Share of a school's total applicant pool assumed to fall in each tier
# (must sum to 1.0)
PRIORITY_TIER_SHARES = {
    "sibling": 0.05,
    "zoned": 0.30,
    "district": 0.40,
    "borough": 0.15,
    "citywide": 0.10,
}

PRIORITY_TIER_LABELS = {
    "sibling": "Sibling Priority",
    "zoned": "Zoned",
    "district": "In-District",
    "borough": "In-Borough",
    "citywide": "Citywide",
}

DEFAULT_PRIORITY = "district"

# Seat estimation (one 3-K / Pre-K admission cohort)
ENROLLMENT_TO_SEATS_DIVISOR = 8
MIN_BASE_SEATS = 18
MAX_BASE_SEATS = 72
DEFAULT_BASE_SEATS = 36

# Demand multiplier by composite score, checked from highest to lowest
SCORE_DEMAND_MULTIPLIERS = [
    (90, 3.5),
    (80, 2.5),
    (70, 1.8),
    (60, 1.2),
]
DEFAULT_DEMAND_MULTIPLIER = 0.8

# Program multipliers (independent, both may apply)
GIFTED_TALENTED_MULTIPLIER = 1.5
DUAL_LANGUAGE_MULTIPLIER = 1.3

# Fixed acceptance probabilities for guaranteed-priority tiers
# (applied only when seats remain)
FIXED_ACCEPTANCE_PROBABILITIES = {
    "sibling": 0.98,
    "zoned": 0.85,
}

# Lottery tiers never exceed this acceptance probability
MAX_LOTTERY_ACCEPTANCE = 0.95

# Waitlist: min(WAITLIST_CAP, WAITLIST_BASE / max(WAITLIST_RATIO_FLOOR, ratio))
WAITLIST_BASE = 0.3
WAITLIST_RATIO_FLOOR = 0.5
WAITLIST_CAP = 0.5
