#!/usr/bin/env python3
"""
OSBUILD-KS SECTION MERGER (Phase 1.4)
-------------------------------------
After parsing there can be duplicate sections. Script sections are
independent programs and stay separate; every other section is merged
down to a single logical unit at the position of its first occurrence.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import logging
from typing import Dict, List, Optional, Tuple

from osbuild_ks.core.models import Section

# Each occurrence carries its own interpreter/chroot flags.
REPEATABLE_SECTIONS = frozenset({"pre", "pre-install", "post", "onerror", "traceback"})


class SectionMerger:
    """
    Merge policy for same-keyed sections:
    bodies are concatenated in input order, arguments become the ordered
    union of all occurrences. No body line is ever dropped.
    """

    def __init__(self, repeatable=REPEATABLE_SECTIONS, logger: Optional[logging.Logger] = None):
        self.repeatable = frozenset(repeatable)
        self.logger = logger or logging.getLogger("osbuild_ks.merger")

    def merge_key(self, section: Section) -> Tuple[str, ...]:
        """`%addon` blocks are told apart by their addon id."""
        if section.name == "addon" and section.arguments:
            return (section.name, section.arguments[0])
        return (section.name,)

    def merge(self, sections: List[Section]) -> List[Section]:
        merged: List[Section] = []
        by_key: Dict[Tuple[str, ...], Section] = {}

        for section in sections:
            if section.name in self.repeatable:
                merged.append(section)
                continue

            key = self.merge_key(section)
            target = by_key.get(key)
            if target is None:
                copy = Section(
                    name=section.name,
                    arguments=list(section.arguments),
                    body=list(section.body),
                    line_no=section.line_no
                )
                by_key[key] = copy
                merged.append(copy)
                continue

            self.logger.debug("merging '%%%s' from line %d into line %d",
                              section.name, section.line_no, target.line_no)
            for arg in section.arguments:
                if arg not in target.arguments:
                    target.arguments.append(arg)
            target.body.extend(section.body)

        return merged
