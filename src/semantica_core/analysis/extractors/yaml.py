"""YAML semantic extractor: mapping keys become "key" symbols."""

from typing import Optional

from tree_sitter import Node

from ..models import AnalysisResult, SymbolInfo
from .base import BaseTreeExtractor
from .nodes import find_nodes, start_line

PAIR_NODE_TYPES = ("block_mapping_pair", "flow_pair")


class YAMLExtractor(BaseTreeExtractor):
    """Extractor for YAML documents.

    Keys of block mappings and of inline flow mappings are reported in
    document order, nested keys included.
    """

    @property
    def language_name(self) -> str:
        return "yaml"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for pair in find_nodes(root, PAIR_NODE_TYPES):
            key = self._key_text(pair, source)
            if key:
                result.symbols.append(SymbolInfo(name=key, kind="key", line=start_line(pair)))

    def _key_text(self, pair: Node, source: bytes) -> Optional[str]:
        key_node = pair.child_by_field_name("key")
        if key_node is None:
            return None
        return self._get_node_text(key_node, source).strip().strip("\"'")


__all__ = ["YAMLExtractor"]
