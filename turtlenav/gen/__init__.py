from .spawn import reset_spawn, sample_goal

__all__ = [
    "reset_spawn",
    "sample_goal",
]
