"""
Configuration Settings
======================
Centralized configuration for the reconciliation engine using environment variables.

Validation and comparison rule sets are plain values: services receive them
through their constructors, ``settings`` only supplies the process defaults.
"""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Load .env file explicitly, first match wins
env_paths = [
    Path(__file__).parent.parent.parent / ".env",  # Root of project
    Path(__file__).parent.parent / ".env",  # Package root
    Path.cwd() / ".env",  # Current working directory
]

env_loaded = False
for env_path in env_paths:
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
        logger.debug(f"Loaded .env from: {env_path}")
        env_loaded = True
        break

if not env_loaded:
    logger.debug("No .env file found, using process environment only")


class ValidationRules(BaseModel):
    """Rule set applied by the record validator."""

    model_config = ConfigDict(frozen=True)

    # Manual review is required when warnings are strictly above this count
    review_warning_threshold: int = Field(default=2, ge=0)

    # Supplementary coherence checks (run after the four base rules)
    check_coverage_period: bool = True
    check_tax_premium: bool = True
    check_insured_value: bool = True
    check_coverage_names: bool = True
    check_duplicate_coverages: bool = True

    # Messages
    missing_insurer_message: str = "missing insurer name"
    invalid_premium_message: str = "invalid premium"
    no_coverages_message: str = "no coverages detected"
    none_included_message: str = "no coverage marked included - needs review"
    inverted_period_message: str = "coverage period ends before it starts"
    tax_premium_message: str = "premium including tax is lower than total premium"
    insured_value_message: str = "invalid insured value"
    unnamed_coverage_message: str = "coverage without name"
    duplicate_coverage_message: str = "duplicate coverage '{name}'"


class ComparisonRules(BaseModel):
    """Rule set applied by the comparison matrix builder."""

    model_config = ConfigDict(frozen=True)

    # Observation text of the synthetic cell used when an insurer lacks a coverage
    not_included_text: str = "not included"

    # Reject batches whose records disagree on client or risk line
    enforce_batch_consistency: bool = True


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Info
    APP_NAME: str = "Insurance Quotation Reconciliation Engine"
    APP_DESCRIPTION: str = "Validation and cross-insurer comparison of extracted insurance quotations"
    APP_VERSION: str = "1.0.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Rule sets (override with VALIDATION__review_warning_threshold=3 etc.)
    VALIDATION: ValidationRules = ValidationRules()
    COMPARISON: ComparisonRules = ComparisonRules()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
    )


# Create global settings instance
settings = Settings()
