"""
Tests for logger functionality.
"""

from stockmatch.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["checks_run"] == 0

    def test_file_output(self, tmp_path):
        """File handler should write to the log directory."""
        logger = StructuredLogger(name="test-file", log_dir=tmp_path, enable_console=False)
        logger.info("Created material", material_id="abc")
        for handler in logger.logger.handlers:
            handler.flush()

        log_files = list(tmp_path.glob("stockmatch_*.log"))
        assert len(log_files) == 1
        content = log_files[0].read_text(encoding="utf-8")
        assert "Created material" in content
        assert '"material_id": "abc"' in content

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_metrics_tracking(self):
        """Metrics should be tracked correctly."""
        logger = StructuredLogger(name="test", enable_file=False, enable_console=False)

        logger.record_check("wood", 2)
        logger.record_check("wood", 0)
        logger.record_check("metal", 1)
        logger.record_merged()
        logger.record_created()
        logger.record_created()
        logger.record_created()
        logger.record_validation_error()

        metrics = logger.get_metrics()
        assert metrics["checks_run"] == 3
        assert metrics["duplicates_found"] == 3
        assert metrics["duplicates_by_category"] == {"wood": 2, "metal": 1}
        assert metrics["materials_created"] == 3
        assert metrics["materials_merged"] == 1
        assert metrics["merge_rate"] == 0.25
        assert metrics["duplicates_per_check"] == 1.0
        assert metrics["validation_errors"] == 1

    def test_metrics_summary_without_activity(self):
        logger = StructuredLogger(name="test", enable_file=False, enable_console=False)
        logger.log_metrics_summary()
        assert logger.get_metrics()["merge_rate"] == 0.0


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self):
        """get_logger should return same instance."""
        reset_logger()
        logger1 = get_logger(enable_file=False, enable_console=False)
        logger2 = get_logger()
        assert logger1 is logger2

    def test_reset_logger(self):
        """reset_logger should clear the global instance."""
        logger1 = get_logger()
        reset_logger()
        logger2 = get_logger(enable_file=False, enable_console=False)
        assert logger1 is not logger2
