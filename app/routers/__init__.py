# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - fish.py: Fish registry CRUD and availability
# - stats.py: Dashboard counters
# - orders.py: Sales bookkeeping (admin)
# - contest.py: Contest registration, prize spin, results
# - events.py: Public event listing
# - judge.py: Judge workspace and scoring
# - admin.py: Judges, events and registration review (admin)
# - shipping.py / payment.py / ai.py: Third-party gateway proxies
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import admin
from . import ai
from . import contest
from . import events
from . import fish
from . import health
from . import judge
from . import orders
from . import payment
from . import shipping
from . import stats

__all__ = [
    "admin",
    "ai",
    "contest",
    "events",
    "fish",
    "health",
    "judge",
    "orders",
    "payment",
    "shipping",
    "stats",
]
