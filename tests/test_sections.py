"""
OSBUILD-KS SECTION PARSER SUITE
-------------------------------
State-machine transitions, blank-line asymmetry and both irregularity
policies.
"""

import logging
from pathlib import Path

import pytest

from osbuild_ks.core.errors import KickstartParseError
from osbuild_ks.core.models import SourceText
from osbuild_ks.parsing.loader import split_lines
from osbuild_ks.parsing.sections import SectionParser


def source(text: str) -> SourceText:
    return SourceText(path=Path("/ks/test.ks"), lines=split_lines(text))


def test_post_section_and_command_section():
    result = SectionParser().parse(source("cmd1\n%post --erroronfail\nline1\n\nline2\n%end\ncmd2\n"))

    post, command = result.sections
    assert post.name == "post"
    assert post.arguments == ["--erroronfail"]
    assert post.body == ["line1", "", "line2"]
    assert post.line_no == 2

    assert command.name == "command"
    assert command.arguments == []
    assert command.body == ["cmd1", "cmd2"]
    assert result.warnings == []


def test_command_only_document():
    text = "lang en_US.UTF-8\n\nkeyboard us\n\n\ntimezone UTC\n"
    result = SectionParser().parse(source(text))

    assert len(result.sections) == 1
    assert result.sections[0].name == "command"
    assert result.sections[0].body == ["lang en_US.UTF-8", "keyboard us", "timezone UTC"]


def test_sections_keep_marker_order_with_command_last():
    text = "%pre\na\n%end\n%packages\n@core\n%end\nrootpw x\n%post\nb\n%end\n"
    names = [s.name for s in SectionParser().parse(source(text)).sections]
    assert names == ["pre", "packages", "post", "command"]


def test_body_lines_are_verbatim():
    text = "%post --interpreter=/usr/bin/python3\n  indented = True   \n\t\n%end\n"
    post = SectionParser().parse(source(text)).sections[0]
    assert post.arguments == ["--interpreter=/usr/bin/python3"]
    assert post.body == ["  indented = True   ", "\t"]


def test_empty_section():
    result = SectionParser().parse(source("%packages\n%end\n"))
    assert result.sections[0].body == []


def test_end_with_trailing_text_is_not_a_close():
    # only an exact "%end" closes; this is a nested start in strict mode
    with pytest.raises(KickstartParseError):
        SectionParser().parse(source("%post\n%end # done\n%end\n"))


def test_unterminated_section():
    with pytest.raises(KickstartParseError, match="unterminated section") as exc:
        SectionParser().parse(source("lang en_US\n%post\necho hi\n"))
    assert exc.value.line_no == 2


def test_unterminated_section_is_fatal_when_lenient():
    with pytest.raises(KickstartParseError, match="unterminated section"):
        SectionParser(strict=False).parse(source("%packages\n@core\n"))


def test_strict_end_without_start():
    with pytest.raises(KickstartParseError, match="without matching section start") as exc:
        SectionParser().parse(source("lang en_US\n%end\n"))
    assert exc.value.line_no == 2
    assert exc.value.path == Path("/ks/test.ks")


def test_strict_nested_section_start():
    with pytest.raises(KickstartParseError, match="nested section start"):
        SectionParser().parse(source("%post\necho\n%pre\n%end\n"))


def test_lenient_end_without_start_is_dropped():
    result = SectionParser(strict=False).parse(source("lang en_US\n%end\nkeyboard us\n"))

    assert [s.name for s in result.sections] == ["command"]
    assert result.sections[0].body == ["lang en_US", "keyboard us"]
    assert len(result.warnings) == 1
    assert "without matching section start" in result.warnings[0]


def test_lenient_nested_start_is_dropped_from_body():
    text = "%post\necho one\n%pre --log=/tmp/x\necho two\n%end\n"
    result = SectionParser(strict=False).parse(source(text))

    post = result.sections[0]
    assert post.name == "post"
    assert post.body == ["echo one", "echo two"]
    assert "nested section start" in result.warnings[0]


def test_lenient_warnings_reach_the_injected_logger(caplog):
    logger = logging.getLogger("kstest.sections")
    with caplog.at_level(logging.WARNING, logger="kstest.sections"):
        SectionParser(strict=False, logger=logger).parse(source("%end\n"))
    assert any("without matching section start" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("line", ["%", "%command"])
def test_invalid_section_names(line):
    with pytest.raises(KickstartParseError):
        SectionParser().parse(source(f"{line}\n%end\n"))


def test_parser_is_reusable():
    parser = SectionParser()
    with pytest.raises(KickstartParseError):
        parser.parse(source("%post\n"))
    assert [s.name for s in parser.parse(source("lang en\n")).sections] == ["command"]


def test_parse_state_is_local_to_each_call():
    parser = SectionParser(strict=False)

    class ReentrantHandler(logging.Handler):
        def emit(self, record):
            parser.parse(source("lang C\n"))

    logger = logging.getLogger("kstest.reentrant")
    logger.setLevel(logging.WARNING)
    handler = ReentrantHandler()
    logger.addHandler(handler)
    parser.logger = logger
    try:
        result = parser.parse(source("%post\necho one\n%pre\necho two\n%end\n"))
    finally:
        logger.removeHandler(handler)

    post, command = result.sections
    assert post.body == ["echo one", "echo two"]
    assert command.body == []
