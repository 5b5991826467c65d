from pkgtag.reporter import VerboseReporter


class RecordingEcho:
    def __init__(self):
        self.lines = []

    def __call__(self, message, err=False):
        assert err, "verbose output must go to stderr"
        self.lines.append(message)


def test_disabled_reporter_writes_nothing():
    echo = RecordingEcho()
    with VerboseReporter(False, echo=echo) as reporter:
        reporter.emit("> git tag v1.0.0")
    assert echo.lines == []
    assert not reporter.header_emitted


def test_first_message_gets_leading_blank_line_and_close_adds_trailing():
    echo = RecordingEcho()
    with VerboseReporter(True, echo=echo) as reporter:
        reporter.emit("> git tag v1.0.0")
        reporter.emit("> git push origin v1.0.0")
    assert echo.lines == ["\n> git tag v1.0.0", "> git push origin v1.0.0", ""]


def test_nothing_emitted_means_no_trailing_line():
    echo = RecordingEcho()
    with VerboseReporter(True, echo=echo):
        pass
    assert echo.lines == []


def test_header_state_is_per_instance():
    echo = RecordingEcho()
    VerboseReporter(True, echo=echo).emit("a")
    VerboseReporter(True, echo=echo).emit("b")
    assert echo.lines == ["\na", "\nb"]


def test_close_runs_when_block_raises():
    echo = RecordingEcho()
    try:
        with VerboseReporter(True, echo=echo) as reporter:
            reporter.emit("> git tag v1.0.0")
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert echo.lines[-1] == ""


def test_reporter_keeps_no_message_history():
    echo = RecordingEcho()
    reporter = VerboseReporter(True, echo=echo)
    for index in range(3):
        reporter.emit(f"> git tag v{index}")
    assert len(echo.lines) == 3
    assert set(vars(reporter)) == {"enabled", "_echo", "_header_emitted"}
