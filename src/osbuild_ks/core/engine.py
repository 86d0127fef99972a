#!/usr/bin/env python3
"""
OSBUILD-KS ENGINE - The High Orchestrator
-----------------------------------------
The KickstartEngine takes a Kickstart path from the outside world through
validation, parsing and invariant checks, and either returns a Document or
a per-file report the CLI can render.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from osbuild_ks.core.errors import IncludeCycleError, KickstartError, KickstartIOError, KickstartParseError
from osbuild_ks.core.models import Document
from osbuild_ks.parsing.pipeline import KickstartPipeline
from osbuild_ks.validator.validator import InputValidator


class KickstartEngine:
    """
    Principal orchestrator for turning Kickstart files into section trees.
    """

    def __init__(self, include_dir: Union[str, Path] = ".", strict: bool = True,
                 logger: Optional[logging.Logger] = None):
        self.include_dir = Path(include_dir)
        self.strict = strict
        base = logger or logging.getLogger("osbuild_ks")
        self.logger = base.getChild("engine")
        self.pipeline = KickstartPipeline(strict=strict, logger=base)
        self.validator = InputValidator()
        self.last_warnings: List[str] = []

    def from_path(self, src: Union[str, Path]) -> Document:
        """
        Parses `src` into a Document.

        Raises:
            KickstartError: on any input, include or section failure.
        """
        self.last_warnings = []
        src_path, inc_path = self.validator.validate_inputs(src, self.include_dir)
        self.logger.info("Creating Kickstart from path '%s' with include path '%s'", src_path, inc_path)

        context = self.pipeline.run(src_path, inc_path)
        self.last_warnings = list(context.warnings)

        problems = self.validator.validate_document(context.document)
        if problems:
            raise KickstartParseError("; ".join(problems), path=src_path)

        return context.document

    def inspect_file(self, src: Union[str, Path]) -> Dict[str, Any]:
        """
        Runs `from_path` and folds the outcome into a report dict instead of
        raising, for batch display.
        """
        try:
            document = self.from_path(src)
        except IncludeCycleError as e:
            return self._file_error(src, "CYCLE_ERROR", e)
        except KickstartParseError as e:
            return self._file_error(src, "PARSE_ERROR", e)
        except KickstartIOError as e:
            return self._file_error(src, "IO_ERROR", e)

        command = document.command
        return {
            "file_path": str(src),
            "status": "PARSED_WITH_WARNINGS" if self.last_warnings else "PARSED",
            "success": True,
            "section_count": len(document.sections),
            "command_count": len(command.body) if command else 0,
            "warnings": list(self.last_warnings),
            "error": None,
            "document": document,
            "timestamp": time.time()
        }

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Aggregate counters for the final CLI panel."""
        total = len(reports)
        successful = sum(1 for r in reports if r.get("success", False))
        return {
            "total_files": total,
            "failed": total - successful,
            "warnings": sum(len(r.get("warnings", [])) for r in reports),
        }

    def _file_error(self, path: Union[str, Path], status: str, error: KickstartError) -> Dict[str, Any]:
        self.logger.error("Error processing %s: %s", path, error)
        return {
            "file_path": str(path), "status": status, "success": False,
            "section_count": 0, "command_count": 0, "warnings": [],
            "error": str(error), "document": None, "timestamp": time.time()
        }
