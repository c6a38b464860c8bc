"""
RoundScope - Match Analytics Derivation Engine for CS2

Derives display facts from match records already produced by the match/stats
service: side-corrected round winners, win streaks, eco and force upsets,
dashboard summaries, ranked scoreboards and kill map projections.

Usage:
    from roundscope import MatchData, summarize_match, rank_players

    data = MatchData.from_dict(payload)
    narrative = summarize_match(data.match, data.rounds)
    for player in rank_players(data.player_stats, "rating"):
        print(f"{player.name}: {player.rating:.2f}")
"""

__version__ = "0.1.0"
__author__ = "RoundScope Contributors"

_LAZY_IMPORTS = {
    # Records
    "Match": "roundscope.core.schemas",
    "MatchData": "roundscope.core.schemas",
    "RoundOutcome": "roundscope.core.schemas",
    "EconomyRound": "roundscope.core.schemas",
    "PlayerStats": "roundscope.core.schemas",
    "KillEvent": "roundscope.core.schemas",
    "InvalidMatchDataError": "roundscope.core.constants",
    # Side resolver
    "resolve_winning_team": "roundscope.domains.sides",
    "running_scores": "roundscope.domains.sides",
    # Streaks
    "find_streaks": "roundscope.domains.streaks",
    "longest_streak": "roundscope.domains.streaks",
    # Economy
    "classify_buy_outcome": "roundscope.domains.economy",
    "summarize_economy_wins": "roundscope.domains.economy",
    # Summary
    "summarize_matches": "roundscope.domains.summary",
    "summarize_match": "roundscope.domains.summary",
    "compute_halftime_score": "roundscope.domains.summary",
    "classify_result": "roundscope.domains.summary",
    # Scoreboard
    "rank_players": "roundscope.domains.scoreboard",
    "split_by_team": "roundscope.domains.scoreboard",
    "team_averages": "roundscope.domains.scoreboard",
    "identify_mvp": "roundscope.domains.scoreboard",
    "identify_standouts": "roundscope.domains.scoreboard",
    # Kill map
    "compute_bounds": "roundscope.visualization.killmap",
    "normalize": "roundscope.visualization.killmap",
    "filter_kills": "roundscope.visualization.killmap",
    "distinct_weapons": "roundscope.visualization.killmap",
}


def __getattr__(name):
    """Lazy import so `import roundscope` does not pull in pandas."""
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module 'roundscope' has no attribute '{name}'")
    import importlib

    return getattr(importlib.import_module(module_name), name)


__all__ = ["__version__", *_LAZY_IMPORTS]
