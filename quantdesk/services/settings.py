import os
from typing import Optional

from pydantic import BaseModel, Field

from quantdesk.portfolio.analysis import DEFAULT_RISK_FREE_RATE


class EngineSettings(BaseModel):
    log_file: str = Field(
        default_factory=lambda: os.path.join(os.path.dirname(__file__), "..", "..", "logs.txt")
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    default_risk_free_rate: float = DEFAULT_RISK_FREE_RATE
    monte_carlo_max_simulations: int = 20000
    monte_carlo_seed: Optional[int] = None


def load_settings() -> EngineSettings:
    """Build settings from the environment, keeping defaults for unset variables."""
    values: dict = {}
    if os.getenv("LOG_FILE"):
        values["log_file"] = os.getenv("LOG_FILE")
    if os.getenv("CORS_ORIGINS"):
        values["cors_origins"] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()
        ]
    if os.getenv("DEFAULT_RISK_FREE_RATE"):
        values["default_risk_free_rate"] = os.getenv("DEFAULT_RISK_FREE_RATE")
    if os.getenv("MONTE_CARLO_MAX_SIMULATIONS"):
        values["monte_carlo_max_simulations"] = os.getenv("MONTE_CARLO_MAX_SIMULATIONS")
    if os.getenv("MONTE_CARLO_SEED"):
        values["monte_carlo_seed"] = os.getenv("MONTE_CARLO_SEED")
    return EngineSettings(**values)
