"""
Record Loader - resolves configured record type names to dataclass types.

Configuration maps a short record type name to a dotted import path:

    record_types:
      applicant: "myapp.models.Applicant"

The loader imports ``myapp.models``, takes ``Applicant`` from it, checks it
is a dataclass and caches the class by name. Instances are then built from
plain dicts with keyword arguments, which is how the service and JSON-RPC
layers turn request data into records.
"""

import dataclasses
import importlib
import logging
from typing import Any, Dict

from .errors import RecordTypeError

logger = logging.getLogger(__name__)


class RecordLoader:
    """Dynamically loads record types named in configuration"""

    def __init__(self, record_types: Dict[str, str]):
        """
        Initialize record loader.

        Args:
            record_types: Mapping of record type name to "package.module.ClassName"
        """
        self.record_types = dict(record_types)
        self.loaded_types: Dict[str, type] = {}  # Cache: name -> class

    def load_type(self, name: str) -> type:
        """
        Resolve a record type by its configured name.

        Raises:
            RecordTypeError: If the name is not configured, the module or class
                cannot be imported, or the class is not a dataclass
        """
        if name in self.loaded_types:
            return self.loaded_types[name]

        path = self.record_types.get(name)
        if path is None:
            raise RecordTypeError(f"Unknown record type: {name}")

        module_name, _, class_name = path.rpartition(".")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise RecordTypeError(f"Failed to import record type {name} from {module_name}: {e}")

        record_class = getattr(module, class_name, None)
        if record_class is None:
            raise RecordTypeError(f"Class '{class_name}' not found in module {module_name}")
        if not (isinstance(record_class, type) and dataclasses.is_dataclass(record_class)):
            raise RecordTypeError(f"Record type {name} ({path}) is not a dataclass")

        logger.debug(f"Loaded record type {name} -> {path}")
        self.loaded_types[name] = record_class
        return record_class

    def build(self, name: str, data: Dict[str, Any]) -> Any:
        """
        Build a record instance from a dict of field values.

        Raises:
            RecordTypeError: If the type cannot be loaded or rejects the data
        """
        record_class = self.load_type(name)
        try:
            return record_class(**data)
        except TypeError as e:
            raise RecordTypeError(f"Cannot build {name} from data: {e}")
