"""Tests for ReportConfig."""

from pathlib import Path

import pytest

from mdreport.config import ReportConfig
from mdreport.engine.geometry import Margins
from mdreport.exceptions import ConfigError


class TestReportConfig:
    def test_defaults(self):
        config = ReportConfig()

        assert config.page_size == "A4"
        assert config.margins == Margins(top=30.0, bottom=20.0, left=20.0, right=20.0)
        assert config.highlight_code is True
        assert config.footer_enabled is True
        assert config.logo_path is None

    def test_geometry(self):
        geometry = ReportConfig(page_size="letter").geometry

        assert geometry.size.width == 215.9
        assert geometry.content_bottom == pytest.approx(259.4)

    def test_unknown_page_size(self):
        with pytest.raises(ConfigError):
            ReportConfig(page_size="A3")

    def test_margins_must_leave_room(self):
        with pytest.raises(ConfigError):
            ReportConfig(margins=Margins(top=150.0, bottom=150.0, left=20.0, right=20.0))

    def test_negative_margins(self):
        with pytest.raises(ConfigError):
            ReportConfig(margins=Margins(top=-1.0, bottom=20.0, left=20.0, right=20.0))


class TestFromOptions:
    def test_cli_style_options(self):
        config = ReportConfig.from_options(
            {
                "logo": "logo.png",
                "body_font": "Body.ttf",
                "heading_font": None,
                "no_highlight": True,
                "page_size": "LETTER",
                "log_level": "DEBUG",
            }
        )

        assert config.logo_path == Path("logo.png")
        assert config.body_font_path == Path("Body.ttf")
        assert config.heading_font_path is None
        assert config.highlight_code is False
        assert config.page_size == "LETTER"

    def test_empty_options(self):
        assert ReportConfig.from_options({}) == ReportConfig()

    def test_margins_option(self):
        config = ReportConfig.from_options({"margins": [10, 15, 10, 15]})

        assert config.margins == Margins(top=10.0, bottom=10.0, left=15.0, right=15.0)

    def test_invalid_margin_values(self):
        with pytest.raises(ConfigError):
            ReportConfig.from_options({"margins": ["a", "b", "c", "d"]})

    def test_invalid_page_size(self):
        with pytest.raises(ConfigError):
            ReportConfig.from_options({"page_size": "tabloid"})
