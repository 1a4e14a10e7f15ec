"""Tests for configuration loading."""

from schema_form.config import FormConfig, get_config, update_config


class TestFormConfig:
    """Tests for FormConfig."""

    def test_defaults(self, monkeypatch):
        for name in (
            "SCHEMA_FORM_HOST",
            "SCHEMA_FORM_PORT",
            "SCHEMA_FORM_LONG_TEXT_THRESHOLD",
            "SCHEMA_FORM_REQUIRED_MARKER",
            "SCHEMA_FORM_DEBUG",
        ):
            monkeypatch.delenv(name, raising=False)

        config = FormConfig.from_env()
        assert config.server_port == 9110
        assert config.long_text_threshold == 200
        assert config.required_marker == " *"
        assert config.debug is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SCHEMA_FORM_PORT", "8080")
        monkeypatch.setenv("SCHEMA_FORM_LONG_TEXT_THRESHOLD", "80")
        monkeypatch.setenv("SCHEMA_FORM_LOG_LEVEL", "debug")
        monkeypatch.setenv("SCHEMA_FORM_DEBUG", "True")

        config = FormConfig.from_env()
        assert config.server_port == 8080
        assert config.long_text_threshold == 80
        assert config.log_level == "DEBUG"
        assert config.debug is True

    def test_update_config(self):
        original = get_config().required_marker
        try:
            updated = update_config(required_marker=" (req)", not_a_setting=1)
            assert updated.required_marker == " (req)"
            assert not hasattr(updated, "not_a_setting")
        finally:
            update_config(required_marker=original)
