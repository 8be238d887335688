"""Tests for the configuration system."""

from decimal import Decimal

import pytest

from aidmatch_core.config import EligibilityPolicy

from aidmatch_agents.config import (
    AidMatchConfig,
    LogFormat,
    OracleConfig,
    OracleProvider,
    PipelineConfig,
)


class TestOracleConfig:
    """Test suite for OracleConfig."""

    def test_default_values(self):
        """OracleConfig should default to the rule engine."""
        config = OracleConfig()

        assert config.provider == OracleProvider.RULES
        assert config.timeout == 30.0
        assert config.enabled is True

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            OracleConfig(timeout=0)

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValueError):
            OracleConfig(provider="crystal-ball")

    def test_from_environment(self, monkeypatch):
        """OracleConfig should load from environment variables."""
        monkeypatch.setenv("AIDMATCH_ORACLE_PROVIDER", "anthropic")
        monkeypatch.setenv("AIDMATCH_ORACLE_TIMEOUT", "5")
        monkeypatch.setenv("AIDMATCH_ORACLE_ENABLED", "false")

        config = OracleConfig()

        assert config.provider == OracleProvider.ANTHROPIC
        assert config.timeout == 5.0
        assert config.enabled is False


class TestPipelineConfig:
    """Test suite for PipelineConfig."""

    def test_default_values(self):
        config = PipelineConfig()

        assert config.persist_results is True
        assert config.debug_mode is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("AIDMATCH_PIPELINE_PERSIST_RESULTS", "false")
        monkeypatch.setenv("AIDMATCH_PIPELINE_DEBUG_MODE", "true")

        config = PipelineConfig()

        assert config.persist_results is False
        assert config.debug_mode is True


class TestAidMatchConfig:
    """Test suite for AidMatchConfig."""

    def test_default_values(self):
        """AidMatchConfig should have sensible defaults."""
        config = AidMatchConfig()

        assert config.env == "development"
        assert config.log_level == "INFO"
        assert config.log_format == LogFormat.CONSOLE
        assert config.oracle.provider == OracleProvider.RULES
        assert config.pipeline.persist_results is True
        assert config.policy.snap_fpl_percent == Decimal("130")

    def test_custom_nested_config(self):
        config = AidMatchConfig(
            oracle=OracleConfig(timeout=2.0),
            policy=EligibilityPolicy(guidelines_year=2025),
        )

        assert config.oracle.timeout == 2.0
        assert config.policy.guidelines_version == "HHS-2025"

    def test_environment_validation(self):
        """Environment should be validated and case-insensitive."""
        assert AidMatchConfig(env="PRODUCTION").env == "production"
        assert AidMatchConfig(env="test").env == "test"

        with pytest.raises(ValueError):
            AidMatchConfig(env="invalid")

    def test_log_level_validation(self):
        assert AidMatchConfig(log_level="warning").log_level == "WARNING"

        with pytest.raises(ValueError):
            AidMatchConfig(log_level="LOUD")

    def test_is_debug_property(self):
        """is_debug should return True when debug mode or DEBUG log level."""
        assert AidMatchConfig(pipeline=PipelineConfig(debug_mode=True)).is_debug is True
        assert AidMatchConfig(log_level="DEBUG").is_debug is True
        assert AidMatchConfig(log_level="INFO").is_debug is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("AIDMATCH_ENV", "staging")
        monkeypatch.setenv("AIDMATCH_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("AIDMATCH_LOG_FORMAT", "json")
        monkeypatch.setenv("AIDMATCH_POLICY_MEDICAID_FPL_PERCENT", "133")

        config = AidMatchConfig()

        assert config.env == "staging"
        assert config.log_level == "ERROR"
        assert config.log_format == LogFormat.JSON
        assert config.policy.medicaid_fpl_percent == Decimal("133")

    def test_loads_from_dotenv_file(self, tmp_path, monkeypatch):
        """AidMatchConfig should load from .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "AIDMATCH_ENV=staging\n"
            "AIDMATCH_ORACLE_TIMEOUT=12\n"
            "AIDMATCH_PIPELINE_DEBUG_MODE=true\n"
            "AIDMATCH_POLICY_SNAP_FPL_PERCENT=135\n"
        )
        monkeypatch.chdir(tmp_path)

        config = AidMatchConfig()

        assert config.env == "staging"
        assert config.oracle.timeout == 12.0
        assert config.pipeline.debug_mode is True
        assert config.policy.snap_fpl_percent == Decimal("135")
