"""Runtime configuration for the rules engine."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RulesSettings(BaseSettings):
    """Draw-rule policy applied when a game state evaluates its status.

    The fifty-move limit is always on. Threefold repetition and insufficient
    material are opt-in extensions.
    """

    fifty_move_limit: int = Field(default=100, ge=1)
    threefold_repetition: bool = False
    insufficient_material: bool = False

    model_config = SettingsConfigDict(env_prefix="CHESSRULES_", frozen=True)


settings = RulesSettings()

__all__ = ["RulesSettings", "settings"]
