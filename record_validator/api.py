"""
Public API for record-validator

The service front door used by the JSON-RPC server and by callers that hold
plain dicts rather than record instances.
"""

import logging
from typing import Any, Dict, List, Optional

from .config_loader import ConfigLoader
from .record_loader import RecordLoader
from .validator import Validator

logger = logging.getLogger(__name__)


class ValidationService:
    """
    Validates dict payloads as registered record types.

    Example:
        from record_validator import ValidationService

        service = ValidationService("validator-config.yaml")
        outcome = service.validate("applicant", {"Age": 17, "Code": "CCCC"})
        if not outcome["valid"]:
            for error in outcome["errors"]:
                print(error["message"])
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize validation service.

        Args:
            config_path: YAML config file; the bundled config is used if omitted

        Raises:
            ConfigError: If configuration cannot be loaded
        """
        self._config_path = config_path
        self._initialize()

    def _initialize(self):
        """Internal initialization logic (used by __init__ and reload_config)."""
        self.config_loader = ConfigLoader(self._config_path)
        self.record_loader = RecordLoader(self.config_loader.get_record_types())
        self.validator = Validator(tag_key=self.config_loader.get_tag_key())
        logger.info(
            f"Validation service ready ({len(self.record_loader.record_types)} record types, "
            f"tag key '{self.validator.tag_key}')"
        )

    def validate(self, record_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build a record from data and validate it.

        Args:
            record_type: Configured record type name
            data: Field values keyed by field name

        Returns:
            {"valid": bool, "errors": [{"field", "kind", "message"}, ...]}

        Raises:
            RecordTypeError: If record_type is unknown or rejects data
        """
        record = self.record_loader.build(record_type, data)
        errors = self.validator.validate(record)
        return {
            "valid": errors is None,
            "errors": errors.to_list() if errors is not None else [],
        }

    def describe_record(self, record_type: str) -> List[Dict[str, Any]]:
        """
        Describe the fields of a record type and their constraints.

        Raises:
            RecordTypeError: If record_type is unknown
        """
        return self.validator.describe(self.record_loader.load_type(record_type))

    def list_record_types(self) -> Dict[str, str]:
        """Return the configured record type names and their import paths."""
        return dict(self.record_loader.record_types)

    def reload_config(self):
        """Re-read configuration and drop cached record types."""
        logger.info(f"Reloading config (age {self.config_loader.get_config_age():.0f}s)")
        self._initialize()
