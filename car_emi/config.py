"""Policy constants for the car loan calculator.

The values here encode the 20/4/10 affordability heuristic and the
termination guards used by the amortization loop. They are plain module
constants so the CLI and the tests can refer to them by name.
"""

# 20/4/10 rule
DOWN_PAYMENT_MIN_PERCENT = 20.0
MAX_TENURE_YEARS = 4.0
EXPENSE_MAX_PERCENT = 10.0

# Amortization loop
SAFETY_MARGIN_MONTHS = 60  # extra iterations allowed beyond the nominal tenure
BALANCE_EPSILON = 1.0  # balances at or below this are treated as paid off

# Prepayments
MAX_PENALTY_RATE_PERCENT = 10.0

# Running costs
DEFAULT_KM_PER_LITER = 15.0

# Fast payoff suggestions
STEP_UP_FACTOR = 1.2
STEP_UP_ROUNDING = 1000
SUGGESTED_PREPAYMENT_SHARE = 0.02
