from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage settings
    local_note_store_path: str = "data/notes.json"

    # Revision settings, in seconds
    note_revision_snapshot_time_interval: int = 600

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
