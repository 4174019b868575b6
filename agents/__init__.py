# =============================================================================
# agents/ - AI Assistant
# =============================================================================
# This package contains the storefront chat assistant:
# - shop_assistant.py: Betta Expert AI on top of OpenAI chat completions
#
# Prompts:
# - prompts/assistant_system.py: System prompt for the assistant
# =============================================================================

from agents.shop_assistant import ShopAssistant

__all__ = [
    "ShopAssistant",
]
