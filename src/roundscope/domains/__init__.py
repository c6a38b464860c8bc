"""
RoundScope Domains - Derived match facts.

This module contains:
- sides: Side-swap aware round attribution and running score
- streaks: Win streak detection
- economy: Eco/force outcome badges and economy narrative
- summary: Dashboard summary, halftime score, result classification
- scoreboard: Stable ranking, team averages, MVP and standouts
"""

__all__: list[str] = []
