"""
Application Settings — All via environment variables with sensible defaults.
"""
import os


class Settings:
    # ── Server ──
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8001"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    RELOAD: bool = os.getenv("RELOAD", "true").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # ── CORS ──
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000,*")

    # ── Phase charts ──
    # Grid resolution per chart (columns x rows)
    CHART_RES_X: int = int(os.getenv("CHART_RES_X", "150"))
    CHART_RES_Y: int = int(os.getenv("CHART_RES_Y", "100"))


settings = Settings()
