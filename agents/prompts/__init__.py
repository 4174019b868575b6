# =============================================================================
# agents/prompts/ - System Prompts
# =============================================================================

from agents.prompts.assistant_system import ASSISTANT_SYSTEM_PROMPT, build_assistant_prompt

__all__ = ["ASSISTANT_SYSTEM_PROMPT", "build_assistant_prompt"]
