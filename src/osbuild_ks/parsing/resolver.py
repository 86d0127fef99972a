#!/usr/bin/env python3
"""
OSBUILD-KS INCLUDE RESOLVER - The Flattener (Phase 1.2)
-------------------------------------------------------
Replaces every `%include <name>` directive with the fully resolved content
of the named file, turning a tree of Kickstart files into one document.

Files are resolved depth-first. The chain of files currently being
resolved is passed down explicitly so that a file including one of its
own ancestors fails fast instead of recursing forever.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import logging
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union

from osbuild_ks.core.errors import IncludeCycleError, KickstartIOError, KickstartParseError
from osbuild_ks.core.models import SourceText
from osbuild_ks.parsing.loader import SourceLoader

INCLUDE_DIRECTIVE = "%include"


class IncludeResolver:
    """
    Flattens include directives against a single include directory.
    Included SourceTexts are discarded as soon as their lines are spliced.
    """

    def __init__(self, loader: Optional[SourceLoader] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("osbuild_ks.resolver")
        self.loader = loader or SourceLoader(logger=self.logger)

    def _parse_directive(self, line: str, source: SourceText, line_no: int) -> str:
        parts = line.split()
        if len(parts) != 2:
            raise KickstartParseError(
                f"malformed include directive: expected '%include <name>', got '{line}'",
                path=source.path, line_no=line_no
            )
        return parts[1]

    def _target_path(self, name: str, include_dir: Path, source: SourceText, line_no: int) -> Path:
        target = include_dir / name
        if not target.exists():
            raise KickstartIOError(f"include target missing: '{target}'", path=source.path, line_no=line_no)
        return target.resolve()

    def _resolve_lines(self, source: SourceText, include_dir: Path,
                       chain: Tuple[Path, ...], active: FrozenSet[Path]) -> List[Tuple[str, Tuple[Path, int]]]:
        flattened: List[Tuple[str, Tuple[Path, int]]] = []

        for index, line in enumerate(source.lines):
            origin = source.origin(index)
            line_no = origin[1]
            # TODO: handle %ksappend, which is resolved before pre-scripts run
            if not line.startswith(INCLUDE_DIRECTIVE):
                flattened.append((line, origin))
                continue

            name = self._parse_directive(line, source, line_no)
            self.logger.debug("'%s' wants to include '%s'", source.path, name)
            target = self._target_path(name, include_dir, source, line_no)

            if target in active:
                raise IncludeCycleError(chain + (target,), line_no=line_no)

            child = self.loader.load(target)
            flattened.extend(self._resolve_lines(child, include_dir, chain + (target,), active | {target}))
            self.logger.debug("'%s' has included '%s'", source.path, target)

        return flattened

    def resolve(self, source: SourceText, include_dir: Union[str, Path]) -> SourceText:
        """
        Returns a new SourceText for `source.path` with every include spliced
        in place. The result contains no line starting with `%include`.

        Raises:
            KickstartParseError: a directive does not have exactly one argument.
            KickstartIOError: an include target is missing or unreadable.
            IncludeCycleError: a file (transitively) includes itself.
        """
        include_dir = Path(include_dir)
        root = source.path.resolve()
        flattened = self._resolve_lines(source, include_dir, (root,), frozenset({root}))
        return SourceText(
            path=source.path,
            lines=[line for line, _ in flattened],
            origins=[origin for _, origin in flattened]
        )
