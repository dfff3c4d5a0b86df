"""Static business content for the onboarding instruction template.

Everything the consultant is allowed to quote (rates, solutions, hardware
prices, images) lives here so it can be edited without touching prompt
assembly. ``core.prompts`` renders it into the system instruction.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

BRAND_NAME = "Bank of America Merchant Services"

PROCESSING_RATES: List[Tuple[str, str]] = [
    ("Swipe, dip and tap", "2.65% + 10¢"),
    ("E-commerce", "2.99% + 30¢"),
    ("Keyed (manual entry)", "3.50% + 15¢"),
]

BUSINESS_RECOMMENDATIONS: Dict[str, Dict[str, Any]] = {
    "Retail Businesses": {
        "recommended": "Retail Solution with Smart Terminal E700/E800",
        "features": [
            "complex inventory management",
            "sales restrictions",
            "barcode scanning",
            "loyalty programs",
            "commission tracking",
        ],
        "accessories": ["barcode scanners", "cash drawer", "weight scale (if needed)"],
    },
    "Restaurants": {
        "recommended": "Restaurant Solution with Smart Terminal E700/E800",
        "features": [
            "table management",
            "menu management",
            "kitchen displays",
            "split payments",
            "gratuity settings",
        ],
        "accessories": ["kitchen display solution", "kitchen impact printer", "cash drawer"],
    },
    "E-commerce/Online": {
        "recommended": "E-commerce Solution with Bank of America Gateway",
        "features": ["online payment processing", "virtual terminal access"],
        "accessories": [],
    },
}

SOLUTION_CATEGORIES: Dict[str, Dict[str, Any]] = {
    "Basic Payment Solution": {
        "type": "basic",
        "devices": ["Countertop A80", "Portable A920"],
        "features": [
            "credit/signature/debit acceptance",
            "printed receipts",
            "basic item reporting",
        ],
        "best_for": "Simple payment processing needs",
    },
    "Essentials Solution": {
        "type": "essentials",
        "devices": ["Smart Terminal E700", "Smart Register E800", "Portable A920"],
        "features": [
            "full inventory management",
            "customer loyalty programs",
            "employee management",
        ],
        "best_for": "Established businesses with complex needs",
    },
    "Restaurant Solution": {
        "type": "restaurant",
        "devices": ["Smart Terminal E700", "Smart Register E800", "Portable A920"],
        "features": [
            "table management",
            "menu management",
            "kitchen displays",
            "order routing",
            "split payments",
            "gratuity settings",
            "online ordering integration",
        ],
        "best_for": "Restaurants of all sizes",
    },
    "Retail Solution": {
        "type": "retail",
        "devices": ["Smart Terminal E700", "Smart Register E800", "Portable A920"],
        "features": [
            "complex inventory (up to 6 subcategories)",
            "sales restrictions",
            "barcode scanning",
            "commission tracking",
            "loyalty programs",
        ],
        "best_for": "Retail stores with complex inventory needs",
    },
    "E-commerce Solution": {
        "type": "ecommerce",
        "devices": ["Bank of America Gateway"],
        "features": ["online payment processing", "email receipts"],
        "best_for": "Online businesses",
    },
}

# (name, price, description, image or None), grouped by hardware category
HARDWARE_PRICE_LIST: Dict[str, List[Tuple[str, str, str, Any]]] = {
    "Stationary Terminals": [
        ("Smart Register E800", "$1,439", "Dual touch-screen displays, built-in 3\" printer, larger footprint", "E800.webp"),
        ("Smart Terminal E700", "$1,129", "Built-in screen and printer, smaller footprint", "E700.webp"),
        ("Countertop A80", "$359", "Payment-only device, reliable connectivity, works with PIN Pad SP30", "A80.webp"),
        ("PIN Pad SP30", "$229", "Client-facing PIN pad (works only with Countertop A80)", None),
    ],
    "Portable Devices": [
        ("Portable A920", "$529", "All-in-one portable device, takes payments and prints receipts", "A920.webp"),
    ],
    "Accessories": [
        ("Cash Drawer", "$209", "Integrated, opens when you ring up a sale", None),
        ("Countertop Barcode Scanner", "$319", "Fast, accurate, small footprint", None),
        ("Handheld Barcode Scanner", "$389", "Handheld laser scanner", None),
        ("Weight Scale", "$999", "For businesses that sell products by weight", None),
        ("Thermal Printer", "$319", "Auto paper cutter and anti-jam guide", None),
        ("Kitchen Impact Printer", "$339", "Durable, for hot kitchen environments", None),
        ("Kitchen Display Solution Screens", "$709-$729", "Digital displays for restaurants", None),
    ],
}

IMAGES: Dict[str, str] = {
    "retail.webp": "retail business setup decorative image",
    "restaurant.webp": "restaurant business setup decorative image",
    "online.webp": "online business setup decorative image",
    "E800.webp": "E800 terminal image",
    "E700.webp": "E700 terminal image",
    "A80.webp": "A80 terminal image",
    "A920.webp": "A920 terminal image",
}

UI_ACTION_GUIDE: Dict[str, str] = {
    "showImage": (
        "display visuals when discussing business types or packages. "
        "The 'data' property is the image file name only (string)"
    ),
    "fileRequest": "ask for a document when it is time to collect it",
    "buttons": "present clear options that move the process forward",
    "showPaymentForm": "display the payment form at the end of the application process",
}

# Documents are requested in this order during the documents phase.
DOCUMENT_REQUEST_ORDER: List[str] = [
    "tax id (ein)",
    "company document (business license)",
    "bank info (bank statement)",
    "owner id (driver's license)",
]

RESPONSE_GUIDELINES: List[str] = [
    "Always ask a question or present options - never just provide information",
    "Include specific pricing when discussing solutions (only answer the question, do not include extra information)",
    "Explain benefits (no contracts, no hidden fees, same-day funding)",
    "Use UI actions to guide the next step",
    "Be consultative - understand their needs before recommending",
    "Drive towards completion - always have a clear path forward",
    "Prefer formatted responses using markdown and bullet points, especially when presenting options",
]

EXAMPLE_REPLY: Dict[str, Any] = {
    "message": (
        "Welcome to Bank of America Merchant Services! I'm here to help you find the "
        "perfect payment processing solution for your business. We offer transparent "
        "pricing with no hidden fees, no contracts, and same-day funding for qualified "
        "accountholders. To get started, what type of business are you running?"
    ),
    "uiAction": {
        "type": "buttons",
        "data": {"options": ["Retail Store", "Restaurant", "E-commerce/Online"]},
    },
    "extractedData": None,
    "nextPhase": "discovery",
}

EXTRACTION_INSTRUCTION = """You are a specialized document data extraction assistant.
Your sole purpose is to extract key information from the provided document and return it in a structured JSON format.
Do not add any conversational text or explanations.
Your entire response must be a single valid JSON object.

Based on the document's content and type, identify it as one of the following: 'businessLicense', 'taxID', 'bankInfo', 'ownerID'.

Return a JSON object with the following structure:
{
  "documentType": "businessLicense|taxID|bankInfo|ownerID",
  "extractedData": { "<key>": "<value>" },
  "confidence": 0.95
}"""


@dataclass(frozen=True)
class PromptConfig:
    """Editable business content rendered into the system instruction."""

    brand_name: str = BRAND_NAME
    processing_rates: List[Tuple[str, str]] = field(default_factory=lambda: list(PROCESSING_RATES))
    business_recommendations: Dict[str, Dict[str, Any]] = field(
        default_factory=lambda: dict(BUSINESS_RECOMMENDATIONS)
    )
    solution_categories: Dict[str, Dict[str, Any]] = field(
        default_factory=lambda: dict(SOLUTION_CATEGORIES)
    )
    hardware_price_list: Dict[str, List[Tuple[str, str, str, Any]]] = field(
        default_factory=lambda: dict(HARDWARE_PRICE_LIST)
    )
    images: Dict[str, str] = field(default_factory=lambda: dict(IMAGES))
    ui_action_guide: Dict[str, str] = field(default_factory=lambda: dict(UI_ACTION_GUIDE))
    document_request_order: List[str] = field(
        default_factory=lambda: list(DOCUMENT_REQUEST_ORDER)
    )
    response_guidelines: List[str] = field(default_factory=lambda: list(RESPONSE_GUIDELINES))
    example_reply: Dict[str, Any] = field(default_factory=lambda: dict(EXAMPLE_REPLY))


DEFAULT_PROMPT_CONFIG = PromptConfig()
