import pytest


@pytest.fixture
def config_file(tmp_path):
    """Config registering the sample record types."""
    path = tmp_path / "validator-config.yaml"
    path.write_text(
        "tag_key: validate\n"
        "log_level: DEBUG\n"
        "record_types:\n"
        "  applicant: sample_records.Applicant\n"
        "  account: sample_records.Account\n"
        "  broken: sample_records.Broken\n"
        "  missing_module: no_such_module.Thing\n"
        "  missing_class: sample_records.NoSuchClass\n"
        "  not_a_record: collections.OrderedDict\n"
    )
    return str(path)


@pytest.fixture
def sample_applicant():
    """Applicant payload that violates both of its constraints."""
    return {"Age": 17, "Code": "CCCC"}
