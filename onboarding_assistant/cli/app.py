"""Onboarding Assistant - CLI entry point."""

import asyncio
import mimetypes
import os
from typing import Callable, List, Optional

from opentelemetry import trace
from opentelemetry.trace import SpanKind

from onboarding_assistant.cli.interface import CLIInterface
from onboarding_assistant.cli.prompts import (
    button_options,
    print_agent_response,
    print_completion_message,
    print_document_summary,
    print_error,
    print_header,
    print_phase_change,
    print_ui_action,
)
from onboarding_assistant.core.config import load_environment
from onboarding_assistant.shared.errors import OnboardingAssistantError
from onboarding_assistant.shared.logging import resolve_log_level, setup_logging
from onboarding_assistant.shared.metrics import configure_metrics, increment_chat_turns
from onboarding_assistant.shared.tracing import configure_tracing, get_tracer

SESSION_ID = "cli-session"
GREETING = "Hello! I'd like to start accepting payments for my business."
QUIT_COMMANDS = ("quit", "exit")


def resolve_button_choice(user_input: str, options: List[str]) -> str:
    """Map a numeric choice like "2" onto the matching button label."""
    choice = user_input.strip()
    if choice.isdigit() and 1 <= int(choice) <= len(options):
        return options[int(choice) - 1]
    return user_input


async def _upload_from_path(interface: CLIInterface, path: str) -> Optional[str]:
    """Upload a local file; return a chat message describing it, or None on failure."""
    path = os.path.expanduser(path.strip())
    mime_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    with open(path, "rb") as handle:
        file_bytes = handle.read()

    try:
        result = await interface.upload_document(
            SESSION_ID, file_bytes, mime_type, os.path.basename(path)
        )
    except OnboardingAssistantError as e:
        print_error(str(e))
        return None

    document = result["document"]
    print_document_summary(document)
    return f"I have uploaded my {document['type']} document ({document['file']})."


async def run_cli_workflow(
    interface: Optional[CLIInterface] = None,
    input_fn: Callable[[str], str] = input,
) -> None:
    """Run the interactive onboarding conversation."""
    print_header("Merchant Onboarding")

    interface = interface or CLIInterface()
    message = GREETING
    phase = None

    while True:
        increment_chat_turns(SESSION_ID)
        try:
            result = await interface.chat_turn(SESSION_ID, message)
        except OnboardingAssistantError as e:
            print_error(str(e))
            return

        reply = result["message"]
        print_agent_response(reply["content"])
        print_ui_action(reply.get("ui_action"))

        if result["phase"] != phase:
            phase = result["phase"]
            print_phase_change(phase)

        if result.get("application_complete"):
            print_completion_message()
            return

        user_input = ""
        while not user_input.strip():
            user_input = input_fn("You: ")
        if user_input.strip().lower() in QUIT_COMMANDS:
            return

        ui_action = reply.get("ui_action") or {}
        path = os.path.expanduser(user_input.strip())
        if ui_action.get("type") == "fileRequest" and os.path.isfile(path):
            uploaded = await _upload_from_path(interface, user_input)
            if uploaded:
                message = uploaded
                continue

        message = resolve_button_choice(user_input, button_options(ui_action))


async def main() -> None:
    """Main entry point for CLI."""
    load_environment()

    setup_logging(
        name="onboarding_assistant_cli",
        level=resolve_log_level("WARNING"),
        service_name="onboarding-assistant-cli",
    )
    configure_tracing(service_name="onboarding-assistant-cli")
    configure_metrics()

    # Single long-lived span so all CLI logs correlate.
    session_span = get_tracer("session").start_span(
        name="session.cli",
        kind=SpanKind.CLIENT,
        attributes={"session.id": SESSION_ID, "session.type": "cli"},
    )
    try:
        with trace.use_span(session_span, end_on_exit=False):
            await run_cli_workflow()
    except (KeyboardInterrupt, EOFError):
        print()
    finally:
        session_span.end()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
