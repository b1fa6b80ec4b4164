"""Configuration management for the docsum application."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import ValidationError


@dataclass
class Config:
    """Application configuration with sensible defaults."""

    outputs_dir: Path = Path("outputs")
    chunk_size: int = 5000
    chunk_overlap: int = 200
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    default_provider: str = "openai"
    default_temperature: float = 0.3

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4-turbo-preview"
    openai_max_tokens: int = 4000

    anthropic_api_key: Optional[str] = None
    anthropic_model: str = "claude-3-opus-20240229"
    anthropic_max_tokens: int = 4000

    log_level: str = "INFO"

    @property
    def summaries_dir(self) -> Path:
        return self.outputs_dir / "summaries"

    @property
    def templates_file(self) -> Path:
        return self.outputs_dir / "custom_prompt_templates.json"

    @classmethod
    def from_env(cls) -> 'Config':
        """Load configuration from environment variables."""
        return cls(
            outputs_dir=Path(os.getenv('DOCSUM_OUTPUTS_DIR', 'outputs')),
            chunk_size=int(os.getenv('DOCSUM_CHUNK_SIZE', '5000')),
            chunk_overlap=int(os.getenv('DOCSUM_CHUNK_OVERLAP', '200')),
            max_file_size=int(os.getenv('DOCSUM_MAX_FILE_SIZE', str(10 * 1024 * 1024))),
            default_provider=os.getenv('DOCSUM_DEFAULT_PROVIDER', 'openai'),
            default_temperature=float(os.getenv('DOCSUM_DEFAULT_TEMPERATURE', '0.3')),
            openai_api_key=os.getenv('OPENAI_API_KEY') or None,
            openai_model=os.getenv('DOCSUM_OPENAI_MODEL', 'gpt-4-turbo-preview'),
            openai_max_tokens=int(os.getenv('DOCSUM_OPENAI_MAX_TOKENS', '4000')),
            anthropic_api_key=os.getenv('ANTHROPIC_API_KEY') or None,
            anthropic_model=os.getenv('DOCSUM_ANTHROPIC_MODEL', 'claude-3-opus-20240229'),
            anthropic_max_tokens=int(os.getenv('DOCSUM_ANTHROPIC_MAX_TOKENS', '4000')),
            log_level=os.getenv('DOCSUM_LOG_LEVEL', 'INFO'),
        )

    def validate(self) -> None:
        """Validate configuration values."""
        # Validate numeric values
        if self.chunk_size <= 0:
            raise ValidationError("chunk_size must be positive")

        if self.chunk_overlap < 0:
            raise ValidationError("chunk_overlap cannot be negative")

        if self.max_file_size <= 0:
            raise ValidationError("max_file_size must be positive")

        if not 0.0 <= self.default_temperature <= 2.0:
            raise ValidationError(
                f"default_temperature must be between 0 and 2, got {self.default_temperature}"
            )

        if self.openai_max_tokens <= 0 or self.anthropic_max_tokens <= 0:
            raise ValidationError("max token ceilings must be positive")

        # Validate log level
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_log_levels:
            raise ValidationError(f"Invalid log_level: {self.log_level}. Must be one of: {valid_log_levels}")

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.outputs_dir.mkdir(parents=True, exist_ok=True)
        (self.summaries_dir / "items").mkdir(parents=True, exist_ok=True)


# Global config instance, used by the CLI only
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
        _config.validate()
        _config.ensure_directories()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    config.validate()
    config.ensure_directories()
    _config = config


def reset_config() -> None:
    """Reset configuration to defaults (useful for testing)."""
    global _config
    _config = None
