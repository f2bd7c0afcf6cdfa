import pytest

from app.search.config import InternalSearchConfig, is_enabled
from app.search.language import Multilanguage


class TestAvailabilityGate:
    @pytest.mark.parametrize(
        "enabled, api_key, hashid, expected",
        [
            (True, "eu1-key", "hash", True),
            (False, "eu1-key", "hash", False),
            (True, "", "hash", False),
            (True, "eu1-key", "", False),
            (True, "", "", False),
        ],
    )
    def test_is_enabled(self, enabled, api_key, hashid, expected):
        config = InternalSearchConfig(enabled=enabled, api_key=api_key, hashid=hashid)
        assert is_enabled(config) is expected

    @pytest.mark.parametrize("flag", ["yes", "YES", "true", "1", "on", True])
    def test_truthy_flags(self, search_settings, flag):
        search_settings.DOOFINDER_ENABLED = flag
        assert InternalSearchConfig.from_settings().is_enabled()

    @pytest.mark.parametrize("flag", ["no", "", "0", "off", None, False])
    def test_falsy_flags(self, search_settings, flag):
        search_settings.DOOFINDER_ENABLED = flag
        assert not InternalSearchConfig.from_settings().is_enabled()

    def test_language_scoped_credentials(self, search_settings, monkeypatch):
        monkeypatch.setenv("DOOFINDER_API_KEY_ES", "eu1-spanishkey")
        monkeypatch.setenv("DOOFINDER_HASHID_ES", "eshash")

        config = InternalSearchConfig.from_settings(language="es")

        assert config.api_key == "eu1-spanishkey"
        assert config.hashid == "eshash"
        assert config.language == "es"

    def test_language_falls_back_to_global_credentials(self, search_settings):
        config = InternalSearchConfig.from_settings(language="fr")

        assert config.api_key == "eu1-secretkey1234"
        assert config.hashid == "abc123"

    def test_results_per_page_from_settings(self, search_settings, monkeypatch):
        monkeypatch.setattr(search_settings, "DOOFINDER_RESULTS_PER_PAGE", 250)
        assert InternalSearchConfig.from_settings().results_per_page == 250

    def test_masked_api_key(self):
        config = InternalSearchConfig(api_key="eu1-abcdef123456")
        assert config.masked_api_key == "eu1-********3456"
        assert "abcdef" not in config.masked_api_key


class TestMultilanguage:
    def test_single_language_is_inactive(self):
        multilanguage = Multilanguage(languages=["en"], default_language="en")
        assert not multilanguage.is_active()
        assert multilanguage.get_current_language() == {"code": "en", "prefix": ""}

    def test_default_language_has_no_prefix(self):
        multilanguage = Multilanguage(languages=["en", "es"], default_language="en")
        assert multilanguage.is_active()
        assert multilanguage.get_default_language()["prefix"] == ""
        assert multilanguage.get_language("es") == {"code": "es", "prefix": "es"}

    def test_current_language_from_query(self, app):
        multilanguage = Multilanguage(languages=["en", "es"], default_language="en")
        with app.test_request_context("/products/?lang=es"):
            assert multilanguage.get_current_language()["code"] == "es"

    def test_current_language_from_header(self, app):
        multilanguage = Multilanguage(languages=["en", "es"], default_language="en")
        with app.test_request_context(
            "/products/", headers={"Accept-Language": "es,en;q=0.5"}
        ):
            assert multilanguage.get_current_language()["code"] == "es"

    def test_unknown_language_falls_back(self, app):
        multilanguage = Multilanguage(languages=["en", "es"], default_language="en")
        with app.test_request_context("/products/?lang=de"):
            assert multilanguage.get_current_language()["code"] == "en"
