# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for data validation
# - services/: Registry, orders, contest and judging rules on top of Supabase
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
