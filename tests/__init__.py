# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the BettaRegistry API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_inventory.py: Fish registry and order workflow
# - test_contest.py: Registration, prize spin, judging and results
# - test_gateways.py: Payment, shipping, AI chat clients and token security
# - test_api.py: Endpoint tests through the TestClient
#
# Run tests with: pytest
# =============================================================================
