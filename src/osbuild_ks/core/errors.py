#!/usr/bin/env python3
"""
OSBUILD-KS ERRORS
-----------------
Typed failures raised by the loading, resolving and parsing phases.
Every error aborts the current run; no partial Document is ever returned.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

from pathlib import Path
from typing import Optional, Sequence


class KickstartError(Exception):
    """Base class for every failure surfaced by osbuild-ks."""

    def __init__(self, message: str, path: Optional[Path] = None, line_no: Optional[int] = None):
        self.message = message
        self.path = path
        self.line_no = line_no
        super().__init__(self._render())

    def _render(self) -> str:
        if self.path is None:
            return self.message
        if self.line_no is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line_no}: {self.message}"


class KickstartIOError(KickstartError):
    """A file could not be found, opened or decoded."""


class KickstartParseError(KickstartError):
    """Structural problem in an include directive or a section."""


class IncludeCycleError(KickstartParseError):
    """A file includes itself, directly or through other files."""

    def __init__(self, chain: Sequence[Path], line_no: Optional[int] = None):
        self.chain = list(chain)
        loop = " -> ".join(str(p) for p in self.chain)
        super().__init__(f"include cycle detected: {loop}", path=self.chain[-2] if len(self.chain) > 1 else None,
                         line_no=line_no)
