"""Application data accumulated over the onboarding conversation."""

import copy
import json
import logging
from typing import Any, Dict, List, Optional, Union

from .models import (
    BUSINESS_TYPES,
    ApplicationSnapshot,
    DocumentRecord,
    Location,
    SolutionPackage,
)

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


def flatten_extracted_value(value: Any) -> Optional[str]:
    """Coerce one extracted-data value to a human-readable string.

    Nested objects and lists are JSON-encoded, scalars are stringified and
    ``None`` is dropped (returned as None).
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return str(value)


class ApplicationStore:
    """
    Structured facts about the merchant's business.

    Every field is mutated only through the methods below and read through
    ``snapshot()``.
    """

    def __init__(self) -> None:
        self.reset()

    def set_business_type(self, business_type: Optional[str]) -> None:
        if business_type is not None and business_type not in BUSINESS_TYPES:
            raise ValueError(f"Unknown business type: {business_type}")
        self.business_type = business_type

    def update_business_info(self, info: Dict[str, Any]) -> None:
        """Shallow-merge business info fields."""
        self.business_info = {**self.business_info, **info}

    def set_selected_package(self, package: Union[SolutionPackage, Dict[str, Any]]) -> None:
        if isinstance(package, dict):
            package = SolutionPackage.from_dict(package)
        self.selected_package = package

    def add_location(self, location: Location) -> None:
        self.locations.append(location)

    def add_document(self, document: DocumentRecord) -> None:
        self.documents.append(document)

    def update_extracted_data(self, data: Dict[str, Any]) -> Dict[str, str]:
        """
        Merge a flat extracted-data patch; later values replace earlier ones.

        Values that are not strings are flattened with a warning, so the
        stored mapping only ever holds strings.

        Returns:
            The flattened patch that was applied
        """
        patch: Dict[str, str] = {}
        for key, value in data.items():
            flat = flatten_extracted_value(value)
            if flat is None:
                continue
            if not isinstance(value, str):
                logger.warning(f"Flattened non-string extracted value for key '{key}'")
            patch[str(key)] = flat

        self.extracted_data = {**self.extracted_data, **patch}
        return patch

    def complete_application(self) -> None:
        self.application_complete = True

    def snapshot(self) -> ApplicationSnapshot:
        return ApplicationSnapshot(
            business_type=self.business_type,
            business_info=copy.deepcopy(self.business_info),
            selected_package=copy.deepcopy(self.selected_package),
            locations=tuple(copy.deepcopy(self.locations)),
            documents=tuple(copy.deepcopy(self.documents)),
            extracted_data=dict(self.extracted_data),
            application_complete=self.application_complete,
        )

    def reset(self) -> None:
        """Return every field to its initial empty value."""
        self.business_type: Optional[str] = None
        self.business_info: Dict[str, Any] = {}
        self.selected_package: Optional[SolutionPackage] = None
        self.locations: List[Location] = []
        self.documents: List[DocumentRecord] = []
        self.extracted_data: Dict[str, str] = {}
        self.application_complete = False
