# Valsync Editor Tests
# Tests for applying edits and the interactive prompt loop

import pytest

from valsync.codec import ErrorKind, encode
from valsync.editor import apply_edits, parse_assignments, prompt_entries


class ScriptedConsole:
    """Console stand-in answering prompts from a script."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.asked = []
        self.warnings = []

    def ask(self, message, *, default="", choices=None):
        self.asked.append((message, default, choices))
        return self.answers.pop(0)

    def confirm(self, message, default=False):
        self.asked.append((message, default, None))
        return self.answers.pop(0)

    def print_warning(self, message):
        self.warnings.append(message)


class TestParseAssignments:
    """Tests for NAME=VALUE parsing."""

    def test_basic(self):
        assert parse_assignments(["volume=75", "label=a=b", "empty="]) == {
            "volume": "75",
            "label": "a=b",
            "empty": "",
        }

    @pytest.mark.parametrize("bad", ["volume", "=75"])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            parse_assignments([bad])


class TestApplyEdits:
    """Tests for apply_edits."""

    def test_accepted_edits_mark_dirty(self, speaker):
        errors = apply_edits(speaker, {"volume": "75", "mode": "loop"})
        assert errors == []
        assert encode(speaker).payload.names == ["volume", "mode"]

    def test_rejected_and_unknown(self, speaker):
        errors = apply_edits(speaker, {"volume": "abc", "bogus": "1", "label": "ok"})

        assert [(e.name, e.kind) for e in errors] == [
            ("volume", ErrorKind.VALIDATION_REJECTED),
            ("bogus", ErrorKind.UNKNOWN_ENTRY_NAME),
        ]
        assert speaker[0].value == 50
        assert speaker[0].dirty is False
        assert speaker[1].value == "ok"


class TestPromptEntries:
    """Tests for the interactive prompt loop."""

    def test_prompts_each_kind(self, speaker):
        # volume, label, muted, mode
        console = ScriptedConsole(["75", "den", True, "loop"])

        changed = prompt_entries(speaker, console)

        assert changed == ["volume", "label", "muted", "mode"]
        assert console.asked[0] == ("Volume", "50", None)
        assert console.asked[3] == ("mode", "once", ["once", "loop", "shuffle"])
        assert speaker[2].value is True

    def test_unchanged_answers(self, speaker):
        console = ScriptedConsole(["50", "", False, "once"])
        assert prompt_entries(speaker, console) == []
        assert not any(e.dirty for e in speaker)

    def test_rejected_input_reprompts(self, speaker):
        console = ScriptedConsole(["loud", "80", "", False, "once"])

        changed = prompt_entries(speaker, console)

        assert changed == ["volume"]
        assert speaker[0].value == 80
        assert len(console.warnings) == 1
        assert "loud" in console.warnings[0]
