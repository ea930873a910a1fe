"""
Hybrid dispatch: preferred provider first, alternate on total exhaustion.
"""

from culturesense_llm.dispatch.hybrid import HybridDispatcher, normalize_messages

__all__ = ["HybridDispatcher", "normalize_messages"]
