"""
Tests for ConfigLoader and ValidationService
"""
import pytest

from record_validator import ConfigError, RecordTypeError, ValidationService
from record_validator.config_loader import ConfigLoader


@pytest.fixture
def service(config_file):
    """Create a ValidationService using the test config."""
    return ValidationService(config_file)


class TestConfigLoader:
    """Test configuration loading and schema checks."""

    def test_bundled_config_loads(self):
        loader = ConfigLoader()
        assert loader.get_tag_key() == "validate"
        assert loader.get_log_level() == "WARNING"
        assert loader.get_record_types() == {}

    def test_explicit_config(self, config_file):
        loader = ConfigLoader(config_file)
        assert loader.get_log_level() == "DEBUG"
        assert loader.get_record_types()["applicant"] == "sample_records.Applicant"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        loader = ConfigLoader(str(path))
        assert loader.get_tag_key() == "validate"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            ConfigLoader(str(tmp_path / "absent.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tag_key: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            ConfigLoader(str(path))

    @pytest.mark.parametrize("content", [
        "tag_key: ''\n",
        "log_level: LOUD\n",
        "record_types:\n  a: NoDots\n",
        "unexpected: 1\n",
        "- a list\n",
    ])
    def test_schema_violations(self, tmp_path, content):
        path = tmp_path / "invalid.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError, match="failed validation"):
            ConfigLoader(str(path))

    def test_config_age(self, config_file):
        assert ConfigLoader(config_file).get_config_age() >= 0


class TestValidate:
    """Test ValidationService.validate()."""

    def test_invalid_payload(self, service, sample_applicant):
        result = service.validate("applicant", sample_applicant)
        assert result == {
            "valid": False,
            "errors": [
                {"field": "Age", "kind": "min", "message": "field Age has value less than min"},
                {"field": "Code", "kind": "in", "message": "field Code does not occur in [AAAA BBBB]"},
            ],
        }

    def test_valid_payload(self, service):
        result = service.validate("applicant", {"Age": 40, "Code": "BBBB"})
        assert result == {"valid": True, "errors": []}

    def test_list_fields(self, service):
        result = service.validate("account", {"Roles": ["admin", "root"], "Scores": [50]})
        assert [e["field"] for e in result["errors"]] == ["Roles"]

    def test_unknown_record_type(self, service):
        with pytest.raises(RecordTypeError, match="Unknown record type"):
            service.validate("nope", {})

    def test_unexpected_field(self, service):
        with pytest.raises(RecordTypeError, match="Cannot build applicant"):
            service.validate("applicant", {"Height": 180})

    @pytest.mark.parametrize("name,message", [
        ("missing_module", "Failed to import"),
        ("missing_class", "not found in module"),
        ("not_a_record", "is not a dataclass"),
    ])
    def test_bad_registrations(self, service, name, message):
        with pytest.raises(RecordTypeError, match=message):
            service.validate(name, {})


class TestDescribeAndList:
    """Test describe_record(), list_record_types() and reload_config()."""

    def test_describe_record(self, service):
        fields = service.describe_record("applicant")
        assert [f["name"] for f in fields] == ["Age", "Code"]
        assert fields[0]["constraints"] == [{"kind": "min", "argument": "18"}]

    def test_list_record_types(self, service):
        types = service.list_record_types()
        assert types["account"] == "sample_records.Account"

    def test_record_types_are_cached(self, service):
        service.describe_record("applicant")
        assert "applicant" in service.record_loader.loaded_types

    def test_reload_config_clears_cache(self, service):
        service.describe_record("applicant")
        service.reload_config()
        assert service.record_loader.loaded_types == {}
        assert service.validate("applicant", {"Age": 18, "Code": "AAAA"})["valid"]
