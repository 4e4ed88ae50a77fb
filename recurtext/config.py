from pydantic import Field
from pydantic_settings import BaseSettings

from recurtext.models import RecurrenceOptions


class ParserSettings(BaseSettings):
    """Parser configuration; ``RECURTEXT_*`` environment variables override defaults."""

    use_cache: bool = True
    cache_size: int = Field(default=256, ge=1)

    # None enables every registered handler
    handlers: list[str] | None = None
    defaults: RecurrenceOptions | None = None

    correct_misspellings: bool = True
    fuzzy_threshold: float = Field(default=0.8, ge=0.0, le=1.0)

    strict: bool = False

    model_config = {
        "env_prefix": "RECURTEXT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = ParserSettings()
