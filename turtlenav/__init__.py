from .config import ArenaConfig, EnvConfig, MotionConfig
from .env.env import TurtleNavEnv

__all__ = ["ArenaConfig", "EnvConfig", "MotionConfig", "TurtleNavEnv"]
