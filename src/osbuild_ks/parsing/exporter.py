#!/usr/bin/env python3
"""
OSBUILD-KS EXPORTER - Tree Inspector
------------------------------------
Renders a parsed Document as YAML so the tree a stage translator would
receive can be read and diffed by humans.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import io
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.scalarstring import LiteralScalarString

from osbuild_ks.core.models import Document, Section


class TreeExporter:
    """
    The Reconstructor: converts a Document into an ordered YAML mapping.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        # Sequences indented 4 (offset 2), matching our other YAML tooling.
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def _section_map(self, section: Section) -> CommentedMap:
        node = CommentedMap()
        node["name"] = section.name
        node["arguments"] = CommentedSeq(section.arguments)
        # Literal blocks keep script bodies readable line for line
        node["body"] = LiteralScalarString(section.text) if section.body else ""
        if section.line_no:
            node.yaml_add_eol_comment(f"line {section.line_no}", "name")
        return node

    def to_map(self, document: Document) -> CommentedMap:
        tree = CommentedMap()
        tree["source"] = str(document.root.path)
        tree["sections"] = CommentedSeq(self._section_map(s) for s in document.sections)
        return tree

    def export(self, document: Document) -> str:
        stream = io.StringIO()
        self.yaml.dump(self.to_map(document), stream)
        return stream.getvalue()
