"""
Immutable XSD schema model
Parses XSD text once into frozen nodes (element, sequence, choice,
complexType) so the path walker never touches the parser's tree.

Only the constructs needed for cardinality comparison are modelled.
Names are kept as local names: namespace prefixes on element names and
type references are stripped, and namespace URIs are never used for
matching.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from .errors import SchemaParseError

logger = logging.getLogger(__name__)


def local_name(name):
    """Strip a `{uri}` or `prefix:` qualifier from a tag, attribute or type name"""
    if not name:
        return ''
    if '}' in name:
        name = name.split('}', 1)[1]
    if ':' in name:
        name = name.split(':', 1)[1]
    return name


def namespace_uri(tag):
    """Namespace URI of a Clark-notation tag, or '' when unqualified"""
    if tag.startswith('{'):
        return tag[1:].split('}', 1)[0]
    return ''


@dataclass(frozen=True)
class ElementNode:
    name: str
    type_name: str = ''
    min_occurs: Optional[str] = None
    anonymous_type: Optional['ComplexTypeNode'] = None

    @property
    def is_optional(self):
        """Only a literal minOccurs="0" makes an element optional"""
        return self.min_occurs is not None and self.min_occurs.strip() == '0'


@dataclass(frozen=True)
class SequenceNode:
    elements: Tuple[ElementNode, ...] = ()


@dataclass(frozen=True)
class ChoiceNode:
    elements: Tuple[ElementNode, ...] = ()


GroupNode = Union[SequenceNode, ChoiceNode]


@dataclass(frozen=True)
class ComplexTypeNode:
    name: str = ''
    groups: Tuple[GroupNode, ...] = ()
    nested_sequences: Tuple[SequenceNode, ...] = ()

    @property
    def sequences(self):
        return tuple(g for g in self.groups if isinstance(g, SequenceNode))

    @property
    def choices(self):
        return tuple(g for g in self.groups if isinstance(g, ChoiceNode))


@dataclass(frozen=True)
class SchemaDocument:
    root_tag: str
    target_namespace: str = ''
    elements: Tuple[ElementNode, ...] = ()
    complex_types: Dict[str, ComplexTypeNode] = field(default_factory=dict)

    def find_element(self, name):
        """First top-level element with the given name"""
        for element in self.elements:
            if element.name == name:
                return element
        return None

    def find_complex_type(self, type_name):
        """Top-level complexType for a (possibly prefixed) type reference"""
        if not type_name:
            return None
        return self.complex_types.get(local_name(type_name))


class SchemaModelBuilder:
    """Build a SchemaDocument from an ElementTree root"""

    def build(self, root):
        elements = []
        complex_types = {}

        for child in root:
            tag = self._tag(child)
            if tag == 'element':
                elements.append(self._parse_element(child))
            elif tag == 'complexType':
                type_name = child.get('name', '')
                if type_name and type_name not in complex_types:
                    complex_types[type_name] = self._parse_complex_type(child)

        return SchemaDocument(
            root_tag=self._tag(root),
            target_namespace=self._target_namespace(root),
            elements=tuple(elements),
            complex_types=complex_types,
        )

    def _tag(self, node):
        # Comments and processing instructions have non-string tags
        if not isinstance(node.tag, str):
            return ''
        return local_name(node.tag)

    def _target_namespace(self, root):
        target_ns = root.get('targetNamespace', '')
        if not target_ns:
            # Some producers qualify the attribute itself
            for attr_name, value in root.attrib.items():
                if local_name(attr_name) == 'targetNamespace':
                    target_ns = value
                    break
        return target_ns

    def _parse_element(self, node):
        anonymous_type = None
        for child in node:
            if self._tag(child) == 'complexType':
                anonymous_type = self._parse_complex_type(child)
                break

        return ElementNode(
            name=node.get('name', ''),
            type_name=local_name(node.get('type', '')),
            min_occurs=node.get('minOccurs'),
            anonymous_type=anonymous_type,
        )

    def _parse_group(self, node):
        elements = tuple(
            self._parse_element(child) for child in node if self._tag(child) == 'element'
        )
        if self._tag(node) == 'choice':
            return ChoiceNode(elements)
        return SequenceNode(elements)

    def _parse_complex_type(self, node):
        groups = tuple(
            self._parse_group(child) for child in node
            if self._tag(child) in ('sequence', 'choice')
        )
        # Non-empty sequences at any depth, ordered by where their first element appears
        position = {id(n): i for i, n in enumerate(node.iter())}
        candidates = []
        for descendant in node.iter():
            if descendant is node or self._tag(descendant) != 'sequence':
                continue
            first = next((c for c in descendant if self._tag(c) == 'element'), None)
            if first is not None:
                candidates.append((position[id(first)], descendant))
        nested_sequences = tuple(
            self._parse_group(seq) for _, seq in sorted(candidates, key=lambda c: c[0])
        )
        return ComplexTypeNode(
            name=node.get('name', ''),
            groups=groups,
            nested_sequences=nested_sequences,
        )


def parse_schema(xsd_text):
    """
    Parse XSD text into a SchemaDocument

    Raises:
        SchemaParseError: text is not well-formed XML
    """
    try:
        root = ET.fromstring(xsd_text)
    except ET.ParseError as e:
        raise SchemaParseError(f"Некорректный XML в XSD: {e}") from e

    uri = namespace_uri(root.tag)
    if uri:
        logger.debug(f"Schema root namespace: {uri}")

    return SchemaModelBuilder().build(root)
