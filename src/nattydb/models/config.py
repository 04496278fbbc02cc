from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Config"]


class Config(BaseSettings):
    """
    Process-wide defaults, read from ``NATTYDB_*`` environment variables or a ``.env`` file.

    ``location`` stands in for the hosting page URL; a ``m=1`` token in its
    query string enables mock mode when nothing else decides it.
    """

    model_config = SettingsConfigDict(
        env_prefix="NATTYDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url_prefix: str = ""
    mock_url_prefix: str = ""
    location: str = ""
    log_level: str = "INFO"
