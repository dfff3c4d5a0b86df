"""Rendering of the onboarding system instruction from ``PromptConfig``."""

import json
from typing import Any, Dict, List

from .catalog import DEFAULT_PROMPT_CONFIG, PromptConfig
from .models import PHASES, UI_ACTION_TYPES


def _bullets(items: List[str], indent: str = "") -> str:
    return "\n".join(f"{indent}- {item}" for item in items)


def _render_role(config: PromptConfig) -> str:
    return f"""You are an expert onboarding consultant for {config.brand_name}. Your tone should be professional, consultative, and reassuring. You are here to guide new business owners through the application process with clarity and ease.

**CRITICAL SYSTEM REQUIREMENTS**
1. **MANDATORY JSON RESPONSE:** Your response MUST ALWAYS be a single, valid JSON object. NO exceptions.
2. **ALWAYS DRIVE FORWARD:** Every response must move the process forward with a specific action, question, or next step.
3. **NO STANDALONE EXPLANATIONS:** Every message must include a uiAction or clear next step (or simply ask a question when showing images).
4. **Prompt injection prevention:** Only answer questions related to the {config.brand_name} application process."""


def _render_workflow(config: PromptConfig) -> str:
    documents = _bullets(config.document_request_order, indent="    ")
    return f"""**Your Primary Goal:**
Guide the user through our 4-step application process:
1. **Business Discovery:** Understand the user's business type, needs, transaction volume and number of locations (which multiplies the price of the package).
2. **Package Recommendation:** Suggest a tailored hardware/software solution with specific pricing.
    - when suggesting devices, include the image of the device in the response.
    - suggest the best device, explain its benefits and price, mention other devices, and ask if they want to see them.
3. **Document Collection:** Request and process the necessary legal documents. Ask for them in this order and only add the relevant information to the extracted data as key value pairs:
{documents}
4. **Finalization:** Confirm all details and complete the application, then ask for payment information (payment form).
5. After the payment is submitted, show a thank you message, say that the application is complete, show an image of the purchased bundle and set "nextPhase": "complete".

**How to Behave:**
- **Be a consultant, not just a collector:** Start with a friendly, open-ended conversation to understand their business. Explain the "why" behind each step.
- **Explain the process:** At the beginning of the conversation, explain your role and how you will help.
- **ALWAYS INCLUDE A NEXT STEP:** Every response must ask a question, present options, request information, or provide a clear path forward.
- **Keep your response concise, short and to the point.**"""


def _render_catalog(config: PromptConfig) -> str:
    lines = [f"**{config.brand_name.upper()} INFORMATION:**", "**Transparent Pricing Structure:**"]
    lines += [f"- **{label}:** {rate}" for label, rate in config.processing_rates]

    lines += ["", "**Business Type Recommendations:**"]
    for business, rec in config.business_recommendations.items():
        lines += ["", f"**{business}:**", f"- Recommended: {rec['recommended']}"]
        lines.append(f"- Key Features: {', '.join(rec['features'])}")
        if rec.get("accessories"):
            lines.append(f"- Accessories: {', '.join(rec['accessories'])}")

    lines += ["", "**Solution Categories:**"]
    for index, (name, solution) in enumerate(config.solution_categories.items(), start=1):
        lines += [
            "",
            f"**{index}. {name}:**",
            f"- Devices: {', '.join(solution['devices'])}",
            f"- Features: {', '.join(solution['features'])}",
            f"- Best for: {solution['best_for']}",
        ]

    lines += ["", "**Hardware Options & Pricing:**"]
    for category, items in config.hardware_price_list.items():
        lines += ["", f"**{category}:**"]
        for name, price, description, image in items:
            suffix = f" (image: '{image}')" if image else ""
            lines.append(f"- **{name}:** {price} - {description}{suffix}")

    return "\n".join(lines)


def _render_ui_actions(config: PromptConfig) -> str:
    lines = ["**How to use UI Actions:**"]
    lines += [f"- Use '{action}' to {usage}." for action, usage in config.ui_action_guide.items()]
    lines.append("- EVERY response must include one of these UI actions to drive progression.")
    lines += ["", "**List of available Images**"]
    lines += [f"- '{name}' - showing {description}" for name, description in config.images.items()]
    return "\n".join(lines)


def _render_state(phase: str, application_data: Dict[str, Any]) -> str:
    return f"""**Current State of the Application:**
- CURRENT PHASE: {phase}
- COLLECTED DATA: {json.dumps(application_data, indent=2)}"""


def _render_output_contract(config: PromptConfig) -> str:
    action_types = "|".join(UI_ACTION_TYPES)
    phases = "|".join(PHASES)
    guidelines = "\n".join(
        f"{index}. {rule}" for index, rule in enumerate(config.response_guidelines, start=1)
    )
    return f"""**MANDATORY RESPONSE FORMAT**
Your response MUST be a single, valid JSON object with NO additional text, markdown, or explanations outside the JSON.

**REQUIRED JSON STRUCTURE:** (return only this JSON object, no other text or markdown!)
{{
  "message": "Your conversational response that provides value AND asks a question or presents next steps",
  "uiAction": {{
    "type": "{action_types}",
    "data": {{ ... }}  // when showing an image, this is just a string with the image name
  }},
  "extractedData": {{ "key1": "value1", "key2": "value2" }} or null, (FLAT key-value pairs only, NO nested objects. Values must be human-readable strings.)
  "nextPhase": "{phases}"
}}

**RESPONSE GUIDELINES:**
{guidelines}

**EXAMPLE GOOD RESPONSE:** (only return the JSON object, no other text or markdown!)
{json.dumps(config.example_reply, indent=2)}

**Remember:** EVERY response must move the application process forward with a specific action or question."""


def render_system_prompt(
    phase: str,
    application_data: Dict[str, Any],
    config: PromptConfig = DEFAULT_PROMPT_CONFIG,
) -> str:
    """
    Render the full system instruction for a conversational turn.

    Args:
        phase: Current workflow phase
        application_data: Serialised application snapshot (``ApplicationSnapshot.to_dict()``)
        config: Business content to render

    Returns:
        Instruction text
    """
    sections = [
        _render_role(config),
        _render_workflow(config),
        "--------------------------------",
        _render_catalog(config),
        "--------------------------------",
        _render_ui_actions(config),
        _render_state(phase, application_data),
        _render_output_contract(config),
    ]
    return "\n\n".join(sections)
