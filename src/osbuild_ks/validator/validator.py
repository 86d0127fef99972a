#!/usr/bin/env python3
"""
OSBUILD-KS VALIDATOR - The Judge
--------------------------------
Two gates around the pipeline: a pre-flight check of the input paths and a
post-flight check that a finished Document honours the tree invariants the
stage translator relies on.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import logging
from pathlib import Path
from typing import List, Tuple, Union

from osbuild_ks.core.errors import KickstartIOError
from osbuild_ks.core.models import COMMAND_SECTION, Document
from osbuild_ks.parsing.loader import COMMENT_MARKER
from osbuild_ks.parsing.resolver import INCLUDE_DIRECTIVE

logger = logging.getLogger("osbuild_ks.validator")


class InputValidator:
    """
    Enforces that inputs exist and that output trees are well formed.
    """

    def validate_inputs(self, src: Union[str, Path], include_dir: Union[str, Path]) -> Tuple[Path, Path]:
        """
        Canonicalizes both paths. `src` must be a regular file and
        `include_dir` an existing directory.
        """
        src_path = Path(src)
        inc_path = Path(include_dir)

        if not src_path.exists():
            raise KickstartIOError(f"The path given for `src` does not exist: '{src}'")
        if not src_path.is_file():
            raise KickstartIOError(f"The path given for `src` is not a file: '{src}'")
        if not inc_path.exists():
            raise KickstartIOError(f"The path given for `include` does not exist: '{include_dir}'")
        if not inc_path.is_dir():
            raise KickstartIOError(f"The path given for `include` is not a directory: '{include_dir}'")

        return src_path.resolve(), inc_path.resolve()

    def validate_document(self, document: Document) -> List[str]:
        """
        Returns a list of invariant violations; an empty list means the tree
        is safe to hand to a translator.
        """
        problems = []

        for i, line in enumerate(document.root.lines, 1):
            if line.startswith(INCLUDE_DIRECTIVE):
                problems.append(f"line {i}: unresolved include directive")
            elif line.startswith(COMMENT_MARKER):
                problems.append(f"line {i}: comment line survived stripping")

        commands = [s for s in document.sections if s.name == COMMAND_SECTION]
        if len(commands) != 1:
            problems.append(f"expected exactly one command section, found {len(commands)}")
        elif commands[0].arguments:
            problems.append("command section must not carry arguments")
        elif document.sections[-1] is not commands[0]:
            problems.append("command section is not the last section")

        for section in document.sections:
            if not section.name:
                problems.append(f"section at line {section.line_no} has an empty name")

        for problem in problems:
            logger.error("Invariant violation in %s: %s", document.root.path, problem)
        return problems
