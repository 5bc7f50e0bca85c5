import io

import pytest

from patrol.core.errors import TransportError
from patrol.core.io import ConsoleIO, ScriptedIO, read_number


def test_console_reads_lines_and_echoes_prompt():
    stdout = io.StringIO()
    console = ConsoleIO(io.StringIO("3.5\n"), stdout)

    assert console.read_line("WARP FACTOR (0-8)") == "3.5"
    console.writeln("ARRIVED")

    assert stdout.getvalue() == "WARP FACTOR (0-8) ARRIVED\n"


def test_console_end_of_input_is_a_transport_error():
    console = ConsoleIO(io.StringIO(""), io.StringIO())
    with pytest.raises(TransportError) as excinfo:
        console.read_line("COMMAND")
    assert excinfo.value.code == "TRANSPORT"


def test_scripted_io_records_transcript():
    scripted = ScriptedIO(["1"])
    scripted.feed("2")

    assert scripted.read_line("COURSE (1-9)") == "1"
    scripted.writeln("TORPEDO MISSED")

    assert scripted.lines == ["COURSE (1-9)", "TORPEDO MISSED"]
    assert scripted.pending == 1
    assert scripted.output == "COURSE (1-9)\nTORPEDO MISSED"


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42.0), (" 0.25 ", 0.25), ("-3", -3.0), ("", None), ("abc", None), ("nan", None), ("inf", None)],
)
def test_read_number(text, expected):
    assert read_number(ScriptedIO([text]), "UNITS") == expected
