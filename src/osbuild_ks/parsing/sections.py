#!/usr/bin/env python3
"""
OSBUILD-KS SECTION PARSER - The Classifier (Phase 1.3)
------------------------------------------------------
Walks the flattened Kickstart text one line at a time and sorts each line
into either the running command section or the body of an open %section.

The parser is a two-state machine. Outside a section, blank lines are
noise and are dropped. Inside a section they are kept, since script bodies
need their exact line structure.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from osbuild_ks.core.errors import KickstartParseError
from osbuild_ks.core.models import COMMAND_SECTION, Section, SourceText

SECTION_MARKER = "%"
END_MARKER = "%end"


@dataclass
class ParseResult:
    """Sections in marker order (command section last) plus lenient-mode warnings."""
    sections: List[Section] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class SectionParser:
    """
    Classifies lines of a flattened document into Sections.

    With `strict=True` a stray `%end` or a section opened inside another one
    raises KickstartParseError. With `strict=False` both are reported as
    warnings and the offending line is dropped. An unterminated section is
    always an error.
    """

    def __init__(self, strict: bool = True, logger: Optional[logging.Logger] = None):
        self.strict = strict
        self.logger = logger or logging.getLogger("osbuild_ks.sections")

    def _open_section(self, line: str, line_no: int, origin: Tuple[Path, int]) -> Section:
        tokens = line.split()
        name = tokens[0][len(SECTION_MARKER):]
        if not name:
            raise KickstartParseError(f"section marker without a name: '{line}'", path=origin[0], line_no=origin[1])
        if name == COMMAND_SECTION:
            raise KickstartParseError(f"'%{name}' is a reserved section name", path=origin[0], line_no=origin[1])
        self.logger.debug("new section '%s' at %s:%d", name, origin[0], origin[1])
        return Section(name=name, arguments=tokens[1:], line_no=line_no)

    def _irregularity(self, message: str, origin: Tuple[Path, int], result: ParseResult):
        path, line_no = origin
        if self.strict:
            raise KickstartParseError(message, path=path, line_no=line_no)
        location = f"{path}:{line_no}"
        self.logger.warning("%s: %s", location, message)
        result.warnings.append(f"{location}: {message}")

    def parse(self, source: SourceText) -> ParseResult:
        """
        Runs the state machine over `source.lines`. Errors and warnings are
        located in the physical file each line came from.

        Raises:
            KickstartParseError: unterminated section, or any irregularity in strict mode.
        """
        result = ParseResult()
        command = Section(name=COMMAND_SECTION)
        current: Optional[Section] = None
        opened_at: Tuple[Path, int] = (source.path, 0)

        for index, line in enumerate(source.lines):
            origin = source.origin(index)

            if current is not None:
                if line == END_MARKER:
                    result.sections.append(current)
                    self.logger.debug("end section '%s'", current.name)
                    current = None
                elif line.startswith(SECTION_MARKER):
                    self._irregularity(
                        f"nested section start '{line}' inside '%{current.name}' "
                        f"(opened at {opened_at[0]}:{opened_at[1]})",
                        origin, result
                    )
                else:
                    current.body.append(line)
                continue

            if line.startswith(SECTION_MARKER):
                if line == END_MARKER:
                    self._irregularity("%end without matching section start", origin, result)
                else:
                    current = self._open_section(line, index + 1, origin)
                    opened_at = origin
            elif line != "":
                command.body.append(line)

        if current is not None:
            raise KickstartParseError(
                f"unterminated section '%{current.name}': missing %end",
                path=opened_at[0], line_no=opened_at[1]
            )

        result.sections.append(command)
        return result
