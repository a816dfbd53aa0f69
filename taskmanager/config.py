"""Application configuration."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from taskmanager.storage import DEFAULT_DATA_FILE


class AppConfig(BaseModel):
    """Runtime settings, built from command-line options."""

    model_config = ConfigDict(frozen=True)

    data_file: Path = Field(default=DEFAULT_DATA_FILE, description="JSON document holding the task collection")
    save_on_exit: bool = Field(default=True, description="Write the collection to disk on 'exit'")
    verbose: bool = Field(default=False, description="Enable debug logging")
