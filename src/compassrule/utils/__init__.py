"""Utility functions for compassrule.

This module provides utility functions including:

- Logging setup and configuration
- Propagation statistics
"""

from compassrule.utils.logging import (
    PropagationLogger,
    PropagationStats,
    configure_logging,
)

__all__ = [
    "PropagationLogger",
    "PropagationStats",
    "configure_logging",
]
