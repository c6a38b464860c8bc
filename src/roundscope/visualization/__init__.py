"""
RoundScope Visualization - Display geometry.

This module contains:
- killmap: Kill position bounds, canvas projection and kill filters
"""

__all__: list[str] = []
