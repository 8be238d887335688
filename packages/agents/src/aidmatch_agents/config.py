"""Configuration system for AidMatch Agents.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults for the AidMatch eligibility pipeline.

Usage:
    from aidmatch_agents.config import AidMatchConfig

    # Load from environment variables and .env file
    config = AidMatchConfig()

    # Access scoring oracle settings
    print(config.oracle.provider)
    print(config.oracle.timeout)

    # Access eligibility thresholds
    print(config.policy.snap_fpl_percent)
"""

from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aidmatch_core.config import EligibilityPolicy


class OracleProvider(str, Enum):
    """Supported scoring oracle providers."""

    RULES = "rules"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    OPENAI = "openai"


class LogFormat(str, Enum):
    """Log renderers."""

    CONSOLE = "console"
    JSON = "json"


class OracleConfig(BaseSettings):
    """Scoring oracle configuration settings.

    The oracle produces per-program verdicts. The default is the built-in
    deterministic rule engine. Other providers are external collaborators:
    no client ships with this package, so an oracle for them must be passed
    to EligibilityPipeline explicitly, and its output is validated before use.

    Environment Variables:
        AIDMATCH_ORACLE_PROVIDER: Oracle provider (rules, anthropic, google, openai)
        AIDMATCH_ORACLE_TIMEOUT: Call timeout in seconds
        AIDMATCH_ORACLE_ENABLED: Disable to mark every verdict indeterminate
    """

    model_config = SettingsConfigDict(
        env_prefix="AIDMATCH_ORACLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: OracleProvider = Field(
        default=OracleProvider.RULES,
        description="Scoring oracle to use",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Oracle call timeout in seconds",
    )
    enabled: bool = Field(
        default=True,
        description="Whether the oracle is called at all",
    )


class PipelineConfig(BaseSettings):
    """Pipeline configuration settings.

    Environment Variables:
        AIDMATCH_PIPELINE_PERSIST_RESULTS: Save assessments and reports after each run
        AIDMATCH_PIPELINE_DEBUG_MODE: Enable verbose debug logging
    """

    model_config = SettingsConfigDict(
        env_prefix="AIDMATCH_PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    persist_results: bool = Field(
        default=True,
        description="Save each assessment and report to the store (best-effort)",
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable verbose debug logging for development",
    )


class AidMatchConfig(BaseSettings):
    """Root configuration for AidMatch Agents.

    Environment Variables:
        AIDMATCH_ENV: Environment name (development, staging, production, test)
        AIDMATCH_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        AIDMATCH_LOG_FORMAT: Log renderer (console, json)

    Example:
        # Load all configuration from environment
        config = AidMatchConfig()

        # Override specific settings
        config = AidMatchConfig(
            oracle=OracleConfig(timeout=5.0),
            policy=EligibilityPolicy(guidelines_year=2025),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="AIDMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment settings
    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: LogFormat = Field(
        default=LogFormat.CONSOLE,
        description="Console output for development, JSON for log shipping",
    )

    # Nested configuration
    oracle: OracleConfig = Field(default_factory=OracleConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    policy: EligibilityPolicy = Field(default_factory=EligibilityPolicy)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_debug(self) -> bool:
        """Check if debug mode is enabled (via pipeline or log level)."""
        return self.pipeline.debug_mode or self.log_level == "DEBUG"
