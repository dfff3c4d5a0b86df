"""Shared data models for the onboarding conversation pipeline."""

import copy
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# Onboarding workflow stages, in the order the instruction template describes.
PHASES: Tuple[str, ...] = (
    "discovery",
    "package",
    "documents",
    "confirmation",
    "payment",
    "complete",
)
INITIAL_PHASE = "discovery"
COMPLETE_PHASE = "complete"

BUSINESS_TYPES: Tuple[str, ...] = (
    "retail",
    "restaurant",
    "online",
    "personal_services",
    "on_the_go",
)

PACKAGE_TYPES: Tuple[str, ...] = (
    "basic",
    "mobile",
    "essentials_light",
    "essentials",
    "restaurant",
    "retail",
    "virtual_terminal",
    "ecommerce",
)

HARDWARE_CATEGORIES: Tuple[str, ...] = ("stationary", "portable", "accessory")

DOCUMENT_TYPES: Tuple[str, ...] = ("businessLicense", "taxID", "bankInfo", "ownerID")

UI_ACTION_TYPES: Tuple[str, ...] = ("buttons", "fileRequest", "showImage", "showPaymentForm")

# Gemini content roles
ROLE_USER = "user"
ROLE_MODEL = "model"


def is_valid_phase(phase: Optional[str]) -> bool:
    """Return True when ``phase`` is one of the workflow stages."""
    return phase in PHASES


@dataclass(frozen=True)
class Message:
    """One turn in the conversation."""

    id: str
    content: str
    is_user: bool
    ui_action: Optional[Dict[str, Any]] = None
    extracted_data: Optional[Dict[str, Any]] = None
    full_response: Optional[str] = None  # raw model text, replayed into later prompts
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "id": self.id,
            "content": self.content,
            "is_user": self.is_user,
            "ui_action": copy.deepcopy(self.ui_action),
            "extracted_data": copy.deepcopy(self.extracted_data),
            "is_error": self.is_error,
        }


@dataclass(frozen=True)
class ConversationSnapshot:
    """Read-only view of a conversation at one point in time."""

    messages: Tuple[Message, ...]
    phase: str
    is_processing: bool
    conversation_id: str

    @property
    def last_message(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None


@dataclass
class Location:
    name: str
    address: str
    contact: str


@dataclass
class HardwareItem:
    name: str
    model: str
    price: float
    description: str
    category: str  # stationary | portable | accessory


@dataclass
class SolutionPackage:
    """The payment solution the merchant selected."""

    name: str
    type: str
    description: str = ""
    recommended_for: List[str] = field(default_factory=list)
    devices: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)
    hardware: List[HardwareItem] = field(default_factory=list)
    total_cost: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolutionPackage":
        """Create from a camelCase or snake_case JSON object."""
        hardware = [
            item if isinstance(item, HardwareItem) else HardwareItem(**item)
            for item in data.get("hardware", [])
        ]
        return cls(
            name=data["name"],
            type=data["type"],
            description=data.get("description", ""),
            recommended_for=list(data.get("recommendedFor", data.get("recommended_for", []))),
            devices=list(data.get("devices", [])),
            features=list(data.get("features", [])),
            hardware=hardware,
            total_cost=float(data.get("totalCost", data.get("total_cost", 0.0))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "recommendedFor": list(self.recommended_for),
            "devices": list(self.devices),
            "features": list(self.features),
            "hardware": [asdict(item) for item in self.hardware],
            "totalCost": self.total_cost,
        }


@dataclass
class DocumentRecord:
    """An uploaded document and what the model read from it."""

    file: str
    type: str
    data: Dict[str, Any]
    confidence: float


@dataclass(frozen=True)
class DocumentClassification:
    """Parsed reply of the document extraction request."""

    document_type: str
    extracted_data: Dict[str, Any]
    confidence: float


@dataclass(frozen=True)
class ApplicationSnapshot:
    """Immutable copy of the application data supplied to prompt assembly."""

    business_type: Optional[str]
    business_info: Dict[str, Any]
    selected_package: Optional[SolutionPackage]
    locations: Tuple[Location, ...]
    documents: Tuple[DocumentRecord, ...]
    extracted_data: Dict[str, str]
    application_complete: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with the field names the instruction template shows the model."""
        return {
            "businessType": self.business_type,
            "businessInfo": copy.deepcopy(self.business_info),
            "selectedPackage": self.selected_package.to_dict() if self.selected_package else None,
            "locations": [asdict(location) for location in self.locations],
            "documents": [asdict(document) for document in self.documents],
            "extractedData": dict(self.extracted_data),
        }


@dataclass(frozen=True)
class GenerationRequest:
    """Outbound Gemini request. Built fresh per call."""

    contents: Tuple[Dict[str, Any], ...]
    generation_config: Dict[str, Any]
    system_instruction: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Render the gateway wire body."""
        payload: Dict[str, Any] = {
            "contents": copy.deepcopy(list(self.contents)),
            "generationConfig": copy.deepcopy(self.generation_config),
        }
        if self.system_instruction is not None:
            payload["systemInstruction"] = {"parts": [{"text": self.system_instruction}]}
        return payload


@dataclass(frozen=True)
class StructuredReply:
    """Parsed model reply."""

    message: str
    ui_action: Optional[Dict[str, Any]] = None
    extracted_data: Optional[Dict[str, Any]] = None
    next_phase: Optional[str] = None
    raw_text: Optional[str] = None
    is_error: bool = False
