"""Tests for /who detection in the client log."""

from unittest.mock import Mock

import pytest

from onlinestats.detector import EventDetector, LastLineState, last_line, parse_online

WHO = "[12:00:01] [Client thread/INFO]: [CHAT] ONLINE: Alice, Bob, Carol"


@pytest.fixture
def logfile(tmp_path):
    path = tmp_path / "latest.log"
    path.write_text("[12:00:00] [Client thread/INFO]: Setting user: me\n")
    return path


def append(path, line):
    with path.open("a") as handle:
        handle.write(line + "\n")


def detector_for(path, dispatch=None):
    return EventDetector(str(path), dispatch or Mock())


class TestLastLineState:
    def test_starts_empty(self):
        assert LastLineState().line == ""

    def test_swap(self):
        state = LastLineState()
        assert state.swap("a") is True
        assert state.swap("a") is False
        assert state.swap("b") is True
        assert state.line == "b"

    def test_empty_line_matches_initial_state(self):
        assert LastLineState().swap("") is False


class TestParsing:
    def test_last_line_skips_blanks(self):
        assert last_line("one\ntwo\n\n   \n\t\n") == "two"

    def test_last_line_of_nothing(self):
        assert last_line("") == ""
        assert last_line("\n \n") == ""

    def test_last_line_crlf(self):
        assert last_line("one\r\ntwo\r\n") == "two"

    def test_parse_online(self):
        assert parse_online("[CHAT] ONLINE: Alice, Bob, Carol") == ["Alice", "Bob", "Carol"]
        assert parse_online(WHO) == ["Alice", "Bob", "Carol"]

    def test_parse_single(self):
        assert parse_online("[CHAT] ONLINE: Alice") == ["Alice"]

    def test_parse_empty(self):
        assert parse_online("[CHAT] ONLINE: ") == []

    def test_parse_other_lines(self):
        assert parse_online("[CHAT] Alice has joined (2/8)!") is None
        assert parse_online("ONLINE: Alice, Bob") is None


class TestEventDetector:
    def test_dispatches_names(self, logfile):
        append(logfile, "[CHAT] ONLINE: Alice, Bob, Carol")
        detector = detector_for(logfile)
        detector.fileModified()
        detector.dispatch.assert_called_once_with(["Alice", "Bob", "Carol"])

    def test_repeated_notification_dispatches_once(self, logfile):
        append(logfile, WHO)
        detector = detector_for(logfile)
        detector.fileModified()
        detector.fileModified()
        assert detector.dispatch.call_count == 1

    def test_identical_trigger_lines_dispatch_once(self, logfile):
        append(logfile, WHO)
        detector = detector_for(logfile)
        detector.fileModified()
        append(logfile, WHO)
        detector.fileModified()
        assert detector.dispatch.call_count == 1

    def test_non_matching_line(self, logfile):
        append(logfile, "[CHAT] Alice has joined (2/8)!")
        detector = detector_for(logfile)
        detector.fileModified()
        assert detector.dispatch.call_count == 0
        # still becomes the baseline
        assert detector.state.line == "[CHAT] Alice has joined (2/8)!"

    def test_new_who_after_other_line(self, logfile):
        detector = detector_for(logfile)
        append(logfile, WHO)
        detector.fileModified()
        append(logfile, "[CHAT] Bob has quit!")
        detector.fileModified()
        append(logfile, WHO)
        detector.fileModified()
        assert detector.dispatch.call_count == 2

    def test_trailing_blank_lines(self, logfile):
        append(logfile, "[CHAT] ONLINE: Alice")
        append(logfile, "")
        append(logfile, "   ")
        detector = detector_for(logfile)
        detector.fileModified()
        detector.dispatch.assert_called_once_with(["Alice"])

    def test_shared_state(self, logfile):
        append(logfile, WHO)
        state = LastLineState()
        first = EventDetector(str(logfile), Mock(), state)
        second = EventDetector(str(logfile), Mock(), state)
        first.fileModified()
        second.fileModified()
        assert first.dispatch.call_count == 1
        assert second.dispatch.call_count == 0

    def test_missing_file(self, tmp_path):
        detector = detector_for(tmp_path / "missing.log")
        detector.fileModified()
        assert detector.dispatch.call_count == 0
        assert detector.state.line == ""

    def test_dispatch_errors_are_contained(self, logfile):
        append(logfile, WHO)
        detector = detector_for(logfile, Mock(side_effect=RuntimeError("boom")))
        detector.fileModified()
        assert detector.dispatch.call_count == 1

    def test_undecodable_bytes(self, logfile):
        with logfile.open("ab") as handle:
            handle.write(b"\xff\xfe garbage\n[CHAT] ONLINE: Alice, Bob\n")
        detector = detector_for(logfile)
        detector.fileModified()
        detector.dispatch.assert_called_once_with(["Alice", "Bob"])
