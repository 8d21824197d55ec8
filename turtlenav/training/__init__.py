"""Training-side helpers for turtlenav.

- stats_collector: Episode counters kept outside the env (EpisodeStatsCollector, EpisodeRecord)
"""

from turtlenav.training.stats_collector import EpisodeRecord, EpisodeStatsCollector

__all__ = [
    "EpisodeRecord",
    "EpisodeStatsCollector",
]
