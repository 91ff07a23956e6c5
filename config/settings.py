"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # i18n
    DEFAULT_LANG: str = os.getenv("DEFAULT_LANG", "ko")

    # Data table
    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "10"))

    # Sensor live panel refresh in milliseconds
    SENSOR_REFRESH_MS: int = int(os.getenv("SENSOR_REFRESH_MS", "5000"))

    # Simulation
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))


settings = Settings()

PAGE_SIZE_OPTIONS = [10, 20, 50, 100]
