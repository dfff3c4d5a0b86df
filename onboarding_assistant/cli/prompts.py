"""CLI prompts and formatting utilities."""

from typing import Any, Dict, List, Optional


def print_header(title: str) -> None:
    """Print a formatted section header."""
    print(f"\n{'=' * 60}")
    print(f"=== {title}")
    print(f"{'=' * 60}\n")


def print_agent_response(response: str) -> None:
    """Print assistant response with formatting."""
    print("Assistant: ", end="", flush=True)
    print(response, flush=True)
    print()


def button_options(ui_action: Optional[Dict[str, Any]]) -> List[str]:
    """Return the option labels of a buttons directive, if any."""
    if not ui_action or ui_action.get("type") != "buttons":
        return []
    data = ui_action.get("data")
    if isinstance(data, dict):
        options = data.get("options") or []
    elif isinstance(data, list):
        options = data
    else:
        options = []
    return [str(option) for option in options]


def print_ui_action(ui_action: Optional[Dict[str, Any]]) -> None:
    """Render a UI directive as plain text."""
    if not ui_action:
        return

    action_type = ui_action.get("type")
    data = ui_action.get("data")

    if action_type == "buttons":
        for index, option in enumerate(button_options(ui_action), start=1):
            print(f"  [{index}] {option}")
        print()
    elif action_type == "showImage":
        print(f"🖼  {data}\n")
    elif action_type == "fileRequest":
        print("📎 A document is requested. Enter a file path to upload it.\n")
    elif action_type == "showPaymentForm":
        print("💳 Payment form requested. Reply once payment details are submitted.\n")
    else:
        print(f"(unsupported UI action: {action_type})\n")


def print_phase_change(phase: str) -> None:
    """Print the workflow phase after a transition."""
    print(f"--- Phase: {phase.replace('_', ' ').title()} ---\n", flush=True)


def print_document_summary(document: Dict[str, Any]) -> None:
    """Print what was read from an uploaded document."""
    print(f"✅ {document.get('file')} recognised as {document.get('type')} "
          f"(confidence {float(document.get('confidence', 0.0)):.0%})\n", flush=True)


def print_error(error: str) -> None:
    """Print error message."""
    print(f"❌ Error: {error}\n", flush=True)


def print_completion_message() -> None:
    """Print workflow completion message."""
    print("=" * 60)
    print("Application complete!")
    print("=" * 60)
