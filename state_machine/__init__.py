"""
State machine module for the bot conversation.

This module implements the State pattern: the engine resolves global
navigation and the menu, and delegates everything else to the handler of
the user's current mode.

Components:
- ConversationEngine: Main orchestrator
- ConversationContext: Context shared with the handlers for one message
- ModeHandler (base): Abstract base class for mode handlers
- Concrete handlers: One per mode
"""

from .context import ConversationContext
from .engine import MENU_TARGETS, ConversationEngine

__all__ = [
    "ConversationEngine",
    "ConversationContext",
    "MENU_TARGETS",
]
