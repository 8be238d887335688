"""Tests for the program catalog."""

from dataclasses import replace

import pytest

from aidmatch_core import ProgramCatalog, default_catalog
from aidmatch_core.catalog import DEFAULT_PROGRAMS
from aidmatch_core.exceptions import ConfigurationError


class TestProgramCatalog:
    """Test suite for ProgramCatalog."""

    def test_default_catalog_order(self):
        catalog = default_catalog()
        assert catalog.program_ids == ["snap", "wic", "liheap", "hcv", "tanf", "eitc", "ctc", "medicaid"]

    def test_lookup_by_id(self):
        catalog = default_catalog()

        assert catalog.get("medicaid").category == "Healthcare"
        assert catalog.get("unknown") is None

    def test_is_a_sequence(self):
        catalog = default_catalog()

        assert len(catalog) == 8
        assert catalog[0].id == "snap"
        assert [d.id for d in catalog][-1] == "medicaid"

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ProgramCatalog(DEFAULT_PROGRAMS + (DEFAULT_PROGRAMS[0],))
        assert exc_info.value.actual == ["snap"]

    def test_negative_processing_days_rejected(self):
        with pytest.raises(ConfigurationError):
            replace(DEFAULT_PROGRAMS[0], processing_days=-1)

    def test_extended_appends(self):
        extra = replace(DEFAULT_PROGRAMS[0], id="snap_pilot", name="SNAP Pilot")
        catalog = default_catalog().extended(extra, version="2025.2")

        assert catalog.program_ids[-1] == "snap_pilot"
        assert catalog.program_ids[:8] == default_catalog().program_ids
        assert catalog.version == "2025.2"

    def test_processing_days_defaults(self):
        catalog = default_catalog()
        assert catalog.get("hcv").processing_days == 180
        assert catalog.get("wic").processing_days == 14
