"""Tests for configuration helpers and the business settings file."""

import json

from proposalgen.core.config import Settings, missing_credentials, slugify
from proposalgen.core.settings_store import BusinessSettingsStore
from proposalgen.models import BusinessSettings


class TestSlugify:

    def test_basic(self):
        assert slugify("Sunrise Bakery") == "sunrise-bakery"

    def test_every_symbol_becomes_a_dash(self):
        assert slugify("Joe's Café & Co.") == "joe-s-caf----co-"

    def test_empty_name(self):
        assert slugify("") == "proposal"


class TestMissingCredentials:

    def test_all_present(self):
        settings = Settings(OPENAI_API_KEY="k", ACCESS_PASSWORD="p", TOKEN_SECRET="s")
        assert missing_credentials(settings) == []

    def test_reports_missing_names(self):
        settings = Settings(OPENAI_API_KEY="", ACCESS_PASSWORD="", TOKEN_SECRET="s")
        assert missing_credentials(settings) == ["OPENAI_API_KEY", "ACCESS_PASSWORD"]


class TestBusinessSettingsStore:

    def test_load_without_file(self, tmp_path):
        store = BusinessSettingsStore(str(tmp_path / "settings.json"))

        assert store.load() == BusinessSettings()
        assert store.is_configured() is False

    def test_save_uses_camel_case_keys(self, tmp_path):
        path = tmp_path / "config" / "settings.json"
        store = BusinessSettingsStore(str(path))

        store.save(BusinessSettings(name="Mason Price Design", email="mason@example.com"))

        assert json.loads(path.read_text()) == {
            "businessName": "Mason Price Design",
            "businessEmail": "mason@example.com",
            "businessPhone": ""
        }
        assert store.is_configured() is True
        assert store.load().name == "Mason Price Design"
