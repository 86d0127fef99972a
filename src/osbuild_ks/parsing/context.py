#!/usr/bin/env python3
"""
OSBUILD-KS PARSE CONTEXT
------------------------
The state record for one Kickstart file going through the pipeline.
It holds the flattened source, the raw and merged section lists and any
warnings raised in lenient mode.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from osbuild_ks.core.models import Document, Section, SourceText


@dataclass
class ParseContext:
    """
    Maintains the state of a single parse run.

    Created by the KickstartPipeline and filled in by the resolver,
    the section parser and the merger, in that order.
    """
    source_path: Path                                       # Root file as given (canonical)
    include_dir: Path                                       # Directory %include names are joined to
    flattened: Optional[SourceText] = None                  # Root file with includes spliced in
    parsed_sections: List[Section] = field(default_factory=list)  # Sections before merging
    warnings: List[str] = field(default_factory=list)       # Lenient-mode irregularities
    document: Optional[Document] = None                     # Final merged tree
    strict: bool = True                                     # Irregularity policy used

    @property
    def merged_count(self) -> int:
        if self.document is None:
            return 0
        return len(self.parsed_sections) - len(self.document.sections)
