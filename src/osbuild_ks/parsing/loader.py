#!/usr/bin/env python3
"""
OSBUILD-KS LOADER - Comment Stripper (Phase 1.1)
------------------------------------------------
Reads a Kickstart file from disk and removes every comment line so the
resolver and parser only ever see meaningful content.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from osbuild_ks.core.errors import KickstartIOError
from osbuild_ks.core.models import SourceText

COMMENT_MARKER = "#"


def split_lines(text: str) -> List[str]:
    """Splits on LF only; a final newline does not produce an empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def strip_comments(lines: Iterable[str]) -> List[str]:
    """
    Drops lines whose first character is '#'. Blank lines and trailing
    whitespace are kept as-is; only full comment lines disappear.
    """
    return [line for line in lines if not line.startswith(COMMENT_MARKER)]


class SourceLoader:
    """
    Turns a path on disk into a comment-free SourceText.
    The file handle is opened and closed within a single `load` call.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("osbuild_ks.loader")

    def _clean_artifacts(self, text: str) -> str:
        """
        Removes a UTF-8 BOM and standardizes line endings to LF.
        """
        text = text.lstrip('\ufeff')
        return text.replace('\r\n', '\n')

    def read(self, path: Union[str, Path]) -> str:
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as handle:
                return handle.read()
        except FileNotFoundError as e:
            raise KickstartIOError("file not found", path=path) from e
        except PermissionError as e:
            raise KickstartIOError("permission denied", path=path) from e
        except UnicodeDecodeError as e:
            raise KickstartIOError(f"invalid encoding: {e.reason}", path=path) from e
        except OSError as e:
            raise KickstartIOError(f"unable to read file: {e.strerror or e}", path=path) from e

    def from_text(self, text: str, path: Union[str, Path]) -> SourceText:
        """Builds a SourceText from text that did not come from `read`."""
        path = Path(path)
        numbered = [(i, line) for i, line in enumerate(split_lines(self._clean_artifacts(text)), 1)
                    if not line.startswith(COMMENT_MARKER)]
        return SourceText(
            path=path,
            lines=[line for _, line in numbered],
            origins=[(path, i) for i, _ in numbered]
        )

    def load(self, path: Union[str, Path]) -> SourceText:
        """
        Reads `path` fully and returns its comment-stripped SourceText.

        Raises:
            KickstartIOError: when the file is missing, unreadable or not UTF-8.
        """
        path = Path(path)
        raw_text = self.read(path)
        try:
            canonical = path.resolve(strict=True)
        except OSError as e:
            raise KickstartIOError("unable to canonicalize path", path=path) from e

        source = self.from_text(raw_text, canonical)
        self.logger.debug("Loaded '%s' (%d lines after comment removal)", canonical, len(source.lines))
        return source
