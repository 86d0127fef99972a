#!/usr/bin/env python3
"""
OSBUILD-KS PIPELINE - The Coordinator
-------------------------------------
Runs the text-to-tree phases in a strict order:

1. load + comment strip (SourceLoader)
2. include flattening (IncludeResolver)
3. section classification (SectionParser)
4. duplicate merging (SectionMerger)

Any phase failure propagates as a KickstartError; a ParseContext is only
returned once all four phases have completed.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import logging
from pathlib import Path
from typing import Optional, Union

from osbuild_ks.core.models import Document, SourceText
from osbuild_ks.parsing.context import ParseContext
from osbuild_ks.parsing.loader import SourceLoader
from osbuild_ks.parsing.merger import SectionMerger
from osbuild_ks.parsing.resolver import IncludeResolver
from osbuild_ks.parsing.sections import SectionParser


class KickstartPipeline:
    """
    The Orchestrator: `logger` is the base of a logger tree. Each component
    logs through its own child (`<base>.loader`, `<base>.resolver`, ...), so
    callers control verbosity without touching global logging state.
    """

    def __init__(self, strict: bool = True, logger: Optional[logging.Logger] = None):
        self.strict = strict
        base = logger or logging.getLogger("osbuild_ks")
        self.logger = base.getChild("pipeline")
        self.loader = SourceLoader(logger=base.getChild("loader"))
        self.resolver = IncludeResolver(loader=self.loader, logger=base.getChild("resolver"))
        self.parser = SectionParser(strict=strict, logger=base.getChild("sections"))
        self.merger = SectionMerger(logger=base.getChild("merger"))

    def _build(self, source: SourceText, include_dir: Path) -> ParseContext:
        context = ParseContext(source_path=source.path, include_dir=include_dir, strict=self.strict)

        # --- PHASE 2: INCLUDE FLATTENING ---
        context.flattened = self.resolver.resolve(source, include_dir)

        # --- PHASE 3: SECTION CLASSIFICATION ---
        result = self.parser.parse(context.flattened)
        context.parsed_sections = result.sections
        context.warnings.extend(result.warnings)

        # --- PHASE 4: MERGING ---
        sections = self.merger.merge(result.sections)
        context.document = Document(root=context.flattened, sections=sections)

        self.logger.info("Parsed '%s': %d sections (%d merged), %d warnings",
                         source.path, len(sections), context.merged_count, len(context.warnings))
        return context

    def run(self, path: Union[str, Path], include_dir: Union[str, Path]) -> ParseContext:
        """Parses the Kickstart file at `path`, resolving includes against `include_dir`."""
        # --- PHASE 1: LOAD ---
        source = self.loader.load(path)
        return self._build(source, Path(include_dir))

    def parse_text(self, text: str, include_dir: Union[str, Path] = ".",
                   path: Union[str, Path] = "<string>") -> ParseContext:
        """Same as `run` for Kickstart text that is already in memory."""
        source = self.loader.from_text(text, path)
        return self._build(source, Path(include_dir))
