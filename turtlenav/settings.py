# turtlenav/settings.py
"""Environment configuration overridable via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import ArenaConfig, EnvConfig, MotionConfig


class Settings(BaseSettings):
    """Env settings, overridable via TURTLENAV_* environment variables."""

    # Motion
    MOVE_SPEED: float = 1.5
    ROTATION_SPEED: float = 180.0

    # Episode
    MAX_STEPS: int = 1000
    DT: float = 0.02
    SEED: int | None = None
    AUTO_RESET: bool = False

    # Goal spawn band
    MIN_DISTANCE: float = 1.0
    MAX_DISTANCE: float = 2.5

    model_config = SettingsConfigDict(env_prefix="TURTLENAV_", env_file=".env", extra="ignore")

    def to_env_config(self) -> EnvConfig:
        return EnvConfig(
            motion=MotionConfig(move_speed=self.MOVE_SPEED, rotation_speed=self.ROTATION_SPEED),
            arena=ArenaConfig(min_distance=self.MIN_DISTANCE, max_distance=self.MAX_DISTANCE),
            max_steps=self.MAX_STEPS,
            dt=self.DT,
            seed=self.SEED,
            auto_reset=self.AUTO_RESET,
        )
