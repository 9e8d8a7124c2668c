"""YAML adapter mapping local tags to annotations."""

from __future__ import annotations

from typing import Any

import yaml

from ..errors import DocumentLoadError
from ..tree import Annotated, Struct

ANNOTATION_SEPARATOR = "::"


class _AnnotatingLoader(yaml.SafeLoader):
    """Safe loader producing ``Struct`` mappings and ``Annotated`` tagged values."""


def _construct_struct(loader: yaml.SafeLoader, node: yaml.MappingNode) -> Struct:
    loader.flatten_mapping(node)
    pairs = []
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=True)
        pairs.append((key, loader.construct_object(value_node, deep=True)))
    return Struct(pairs)


def _construct_annotated(loader: yaml.SafeLoader, suffix: str, node: yaml.Node) -> Annotated:
    annotations = tuple(part for part in suffix.split(ANNOTATION_SEPARATOR) if part)
    if isinstance(node, yaml.ScalarNode):
        implicit = (node.style is None, node.style is not None)
        tag = loader.resolve(yaml.ScalarNode, node.value, implicit)
        untagged = yaml.ScalarNode(tag, node.value, node.start_mark, node.end_mark, node.style)
        value = loader.construct_object(untagged, deep=True)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = _construct_struct(loader, node)
    return Annotated(value, annotations)


_AnnotatingLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_struct)
_AnnotatingLoader.add_multi_constructor("!", _construct_annotated)


class YAMLAdapter:
    """Load every document of a YAML stream.

    ``!foo`` tags a value with annotation ``foo``; ``!foo::bar`` with both.
    """

    format = "yaml"
    suffixes = (".yaml", ".yml")

    def load(self, text: str) -> list[Any]:
        try:
            documents = list(yaml.load_all(text, Loader=_AnnotatingLoader))
        except yaml.YAMLError as exc:
            raise DocumentLoadError(self.format, f"invalid YAML ({exc})") from exc
        return [document for document in documents if document is not None]
