"""Tests für das Konfigurationssystem, Datensatz und Testdaten-Generator."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import DEFAULT_CLASS_CODES, default_app_config
from config.manager import ConfigManager
from config.schema import AppConfig, LifecycleConfig, LogLevel, NamingConfig
from data.fake_data import FakeHomeworkGenerator
from lifecycle.classifier import LifecycleState, classify_all
from models.assignment import AdministrativeStatus, Assignment
from models.course import CourseId
from models.homework_data import HomeworkData
from models.profile import Profile

NOW = datetime(2024, 9, 1, 12, 0, 0, tzinfo=timezone.utc)


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_lifecycle(self):
        config = default_app_config()
        assert config.lifecycle.grace_period == timedelta(days=3)
        assert config.lifecycle.late_window == timedelta(days=1)
        assert config.lifecycle.refresh_interval_seconds == 1.0

    def test_default_naming(self):
        config = default_app_config()
        assert config.naming.separator == "-"
        assert config.naming.class_codes == DEFAULT_CLASS_CODES
        assert config.naming.class_codes["1234"] == "CS23-1"

    def test_default_logging(self):
        assert default_app_config().logging.level == LogLevel.WARNING

    def test_bare_app_config_valid(self):
        config = AppConfig()
        assert config.lifecycle.grace_period_days == 3
        assert config.naming.class_codes == {}


class TestPydanticValidation:
    def test_grace_period_must_be_positive(self):
        with pytest.raises(ValidationError):
            LifecycleConfig(grace_period_days=0)

    def test_refresh_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            LifecycleConfig(refresh_interval_seconds=0)

    def test_separator_without_whitespace(self):
        with pytest.raises(ValidationError):
            NamingConfig(separator=" ")

    def test_separator_not_empty(self):
        with pytest.raises(ValidationError):
            NamingConfig(separator="")

    def test_fractional_grace_period(self):
        assert LifecycleConfig(grace_period_days=0.5).grace_period == timedelta(hours=12)


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        config = default_app_config()
        mgr = ConfigManager(tmp_path / "homework_config.yaml")
        mgr.save(config)
        loaded = mgr.load()
        assert loaded == config

    def test_saved_yaml_has_comments(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "homework_config.yaml")
        mgr.save(default_app_config())
        text = (tmp_path / "homework_config.yaml").read_text(encoding="utf-8")
        assert "─── Lebenszyklus ───" in text
        assert "grace_period_days" in text

    def test_first_run_check_no_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "nonexistent.yaml")
        assert mgr.first_run_check()

    def test_first_run_check_with_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "homework_config.yaml")
        mgr.save(default_app_config())
        assert not mgr.first_run_check()

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("lifecycle:\n  grace_period_days: -2\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()

    def test_load_partial_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "partial.yaml"
        path.write_text("naming:\n  separator: _\n", encoding="utf-8")
        config = ConfigManager(path).load()
        assert config.naming.separator == "_"
        assert config.lifecycle.grace_period_days == 3

    def test_load_or_default_without_file(self, tmp_path: Path):
        config = ConfigManager(tmp_path / "missing.yaml").load_or_default()
        assert config == default_app_config()


# ─── DATENSATZ ────────────────────────────────────────────────────────────────

class TestHomeworkData:
    def test_numeric_ids_coerced(self):
        hw = Assignment(id=17, deadline=NOW)
        assert hw.id == "17"

    def test_status_from_server_code(self):
        hw = Assignment.model_validate(
            {"id": 1, "deadline": "2024-09-01T12:00:00", "administrative_status": 3}
        )
        assert hw.administrative_status == AdministrativeStatus.GRADED

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError, match="Doppelte"):
            HomeworkData(assignments=[
                Assignment(id="1", deadline=NOW),
                Assignment(id="1", deadline=NOW),
            ])

    def test_save_and_load_json(self, tmp_path: Path):
        data = HomeworkData(
            profile=Profile(student_id="20230001", class_name="CS23-1", full_name="Zhang San"),
            assignments=[Assignment(id="1", deadline=NOW, title="Blatt 1")],
            courses=5,
        )
        path = tmp_path / "out" / "data.json"
        data.save_json(path)
        loaded = HomeworkData.load_json(path)
        assert loaded.assignments == data.assignments
        assert loaded.profile == data.profile
        assert loaded.courses == 5
        assert loaded.created_at is not None

    def test_load_json_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            HomeworkData.load_json(tmp_path / "nope.json")

    def test_negative_course_mask_rejected(self):
        with pytest.raises(ValidationError):
            HomeworkData(courses=-1)

    def test_load_json_rejects_negative_course_mask(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text('{"courses": -1}', encoding="utf-8")
        with pytest.raises(ValueError):
            HomeworkData.load_json(path)

    def test_course_selection_ignores_foreign_bits(self):
        data = HomeworkData(courses=128 | 4)
        assert data.course_selection.courses == {CourseId.OPERATING_SYSTEM}

    def test_summary_lists_courses(self):
        data = HomeworkData(courses=4)
        assert "Betriebssysteme" in data.summary()


# ─── TESTDATEN-GENERATOR ──────────────────────────────────────────────────────

class TestFakeData:
    def test_generate_returns_homework_data(self):
        data = FakeHomeworkGenerator(default_app_config()).generate(NOW)
        assert isinstance(data, HomeworkData)
        assert len(data.assignments) == 10

    def test_every_bucket_covered(self):
        config = default_app_config()
        data = FakeHomeworkGenerator(config).generate(NOW, extra=0)
        partition = classify_all(data.assignments, NOW, config.lifecycle.grace_period)
        assert all(partition.counts()[s] >= 1 for s in LifecycleState)

    def test_same_seed_same_data(self):
        config = default_app_config()
        a = FakeHomeworkGenerator(config, seed=7).generate(NOW)
        b = FakeHomeworkGenerator(config, seed=7).generate(NOW)
        assert a == b

    def test_profile_class_name_resolved(self):
        data = FakeHomeworkGenerator(default_app_config()).generate(NOW)
        assert data.profile.class_name in DEFAULT_CLASS_CODES.values()

    def test_courses_within_catalogue(self):
        data = FakeHomeworkGenerator(default_app_config()).generate(NOW)
        assert 0 < data.courses <= 127
