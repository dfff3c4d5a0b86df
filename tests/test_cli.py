"""Tests for the interactive CLI."""

import pytest

from onboarding_assistant.cli.app import resolve_button_choice, run_cli_workflow
from onboarding_assistant.cli.interface import CLIInterface
from onboarding_assistant.cli.prompts import button_options
from onboarding_assistant.core.session import InMemorySessionStore
from tests.fakes import ScriptedGateway

BUTTONS = {"type": "buttons", "data": {"options": ["Retail", "Restaurant"]}}
COMPLETE = {"message": "Thank you! Your application is complete.", "nextPhase": "complete"}


def _scripted_input(*answers):
    remaining = list(answers)
    return lambda prompt: remaining.pop(0)


class TestButtonChoices:
    """Tests for numeric button selection."""

    def test_button_options_from_dict(self):
        assert button_options(BUTTONS) == ["Retail", "Restaurant"]

    def test_button_options_from_list(self):
        assert button_options({"type": "buttons", "data": ["Yes", "No"]}) == ["Yes", "No"]

    def test_button_options_other_actions(self):
        assert button_options({"type": "showImage", "data": "clover-flex"}) == []
        assert button_options(None) == []

    def test_resolve_numeric_choice(self):
        assert resolve_button_choice("2", ["Retail", "Restaurant"]) == "Restaurant"

    def test_resolve_out_of_range_kept(self):
        assert resolve_button_choice("5", ["Retail"]) == "5"
        assert resolve_button_choice("Something else", ["Retail"]) == "Something else"


class TestRunCliWorkflow:
    """Tests for the conversation loop."""

    @pytest.mark.asyncio
    async def test_button_choice_sent_as_label(self, capsys):
        gateway = ScriptedGateway([{"message": "What kind of business?", "uiAction": BUTTONS}, COMPLETE])
        interface = CLIInterface(InMemorySessionStore(), gateway)

        await run_cli_workflow(interface, input_fn=_scripted_input("2"))

        assert gateway.requests[1].contents[-1]["parts"][0]["text"] == "Restaurant"
        output = capsys.readouterr().out
        assert "[1] Retail" in output
        assert "Application complete!" in output

    @pytest.mark.asyncio
    async def test_quit_stops_loop(self):
        gateway = ScriptedGateway([{"message": "Hi there"}])
        interface = CLIInterface(InMemorySessionStore(), gateway)

        await run_cli_workflow(interface, input_fn=_scripted_input("", "quit"))

        assert len(gateway.requests) == 1

    @pytest.mark.asyncio
    async def test_file_request_uploads_document(self, tmp_path, capsys):
        document = tmp_path / "license.pdf"
        document.write_bytes(b"%PDF-1.4")
        gateway = ScriptedGateway(
            [
                {"message": "Please upload your business license.", "uiAction": {"type": "fileRequest"}},
                {"documentType": "businessLicense", "extractedData": {"licenseNumber": "BL-1"}, "confidence": 0.9},
                COMPLETE,
            ]
        )
        store = InMemorySessionStore()
        interface = CLIInterface(store, gateway)

        await run_cli_workflow(interface, input_fn=_scripted_input(str(document)))

        assert gateway.requests[1].contents[0]["parts"][1]["inlineData"]["mimeType"] == "application/pdf"
        follow_up = gateway.requests[2].contents[-1]["parts"][0]["text"]
        assert follow_up == "I have uploaded my businessLicense document (license.pdf)."
        assert store.get("cli-session").application.extracted_data == {"licenseNumber": "BL-1"}
        assert "recognised as businessLicense" in capsys.readouterr().out
