from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Highlander Legality Checker"
    debug: bool = False
    log_level: str = "INFO"

    # Rule lists (banned_list.csv, allowed_list.csv, singleton_exceptions.csv)
    data_dir: Path = PACKAGE_DIR / "data"

    # Trimmed Scryfall snapshot written by highlander.jobs.download_cards
    card_cache_path: Path = PACKAGE_DIR.parent / "cache" / "cards.json"

    # Reference constructed format whose legality flag is the default signal
    secondary_format: str = "pioneer"

    scryfall_bulk_url: str = "https://api.scryfall.com/bulk-data/oracle-cards"
    moxfield_api_base: str = "https://api.moxfield.com/v2/decks/all"
    user_agent: str = "Highlander-Legality-Checker/1.0"

    fetch_max_retries: int = 3
    fetch_timeout_seconds: float = 10.0


settings = Settings()


# =============================================================================
# OUTBOUND REQUEST LIMITS
# =============================================================================

# Upper bound on a single request timeout after backoff
MAX_FETCH_TIMEOUT_SECONDS = 20.0

# Timeout multiplier applied per retry
FETCH_BACKOFF_FACTOR = 1.5
