import logging

from quote_reconciler.core.config import ComparisonRules, Settings, ValidationRules
from quote_reconciler.core.logging_config import configure_logging
from quote_reconciler.utils.helpers import format_currency, normalize_label


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.VALIDATION.review_warning_threshold == 2
        assert settings.COMPARISON.not_included_text == "not included"
        assert settings.COMPARISON.enforce_batch_consistency is True

    def test_nested_environment_override(self, monkeypatch):
        monkeypatch.setenv("VALIDATION__review_warning_threshold", "5")
        monkeypatch.setenv("COMPARISON__not_included_text", "No incluida")

        settings = Settings()

        assert settings.VALIDATION.review_warning_threshold == 5
        assert settings.COMPARISON.not_included_text == "No incluida"

    def test_rule_sets_are_values(self):
        assert ValidationRules() == ValidationRules()
        assert ComparisonRules(not_included_text="x") != ComparisonRules()


class TestHelpers:

    def test_format_currency(self):
        assert format_currency(45200000, "COP") == "COP 45,200,000.00"
        assert format_currency(None) == "N/A"

    def test_normalize_label(self):
        assert normalize_label("  Todo Riesgo ") == "todo riesgo"


class TestLogging:

    def test_configure_logging_with_file(self, tmp_path):
        log_file = tmp_path / "reconciler.log"
        configure_logging("DEBUG", str(log_file))
        logging.getLogger("quote_reconciler.test").info("✅ logged")

        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "✅ logged" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger().level == logging.DEBUG
