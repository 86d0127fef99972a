#!/usr/bin/env python3
"""
OSBUILD-KS CORE MODELS
----------------------
Defines the fundamental data structures used across the osbuild-ks parser.
A SourceText is one file on disk, a Section is one %-delimited block and a
Document is the flattened, parsed tree handed to a stage translator.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

COMMAND_SECTION = "command"


@dataclass
class SourceText:
    """
    The content of one Kickstart file after comment removal.

    Lines are stored without their trailing newline; `text` puts them back.
    """
    path: Path                                        # Canonical absolute path of the file
    lines: List[str] = field(default_factory=list)    # Comment-free lines in file order
    origins: List[Tuple[Path, int]] = field(default_factory=list)  # (file, line) each line came from

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)

    def origin(self, index: int) -> Tuple[Path, int]:
        """Physical file and 1-based line of `lines[index]`."""
        if index < len(self.origins):
            return self.origins[index]
        return self.path, index + 1


@dataclass
class Section:
    """
    A named block such as `%packages --nocore` ... `%end`.

    The synthetic command section collects every top-level line and is the
    only section that is never closed by an explicit `%end`.
    """
    name: str                                          # Marker without '%' (e.g. 'post')
    arguments: List[str] = field(default_factory=list) # Tokens after the marker
    body: List[str] = field(default_factory=list)      # Lines between marker and %end
    line_no: int = 0                                   # Opening marker line in the flat document

    @property
    def is_command(self) -> bool:
        return self.name == COMMAND_SECTION

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self.body)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "arguments": list(self.arguments),
            "body": list(self.body),
        }


@dataclass
class Document:
    """
    The top-level handle: the flattened root file plus its ordered sections.
    """
    root: SourceText
    sections: List[Section] = field(default_factory=list)

    @property
    def command(self) -> Optional[Section]:
        for section in self.sections:
            if section.is_command:
                return section
        return None

    def named(self, name: str) -> List[Section]:
        """Returns every section called `name`, in document order."""
        return [s for s in self.sections if s.name == name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": str(self.root.path),
            "sections": [s.to_dict() for s in self.sections],
        }
