"""
XSD path extraction
Locates the message root under the `Document` element and flattens its
complex type into absolute leaf paths with a required/optional flag.

Elements typed with a named top-level complexType are never recorded
themselves, they only contribute a path segment to their descendants.
Everything reached through a `choice` is optional.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict

from .errors import SchemaStructureError
from .path_comparator import Cardinality
from .schema_model import SchemaDocument, local_name, parse_schema

logger = logging.getLogger(__name__)

DOCUMENT_ELEMENT = 'Document'


@dataclass(frozen=True)
class MessageRoot:
    """Entry point of the message inside the Document type"""
    name: str
    type_name: str
    path: str
    required: bool
    target_namespace: str
    document_type: str


@dataclass(frozen=True)
class SchemaPaths:
    """Result of one extraction"""
    root: MessageRoot
    paths: Dict[str, Cardinality]
    overwrites: Dict[str, int]


@dataclass(frozen=True)
class SchemaPathExtractor:
    """Flatten a parsed schema into {path: Cardinality}"""

    schema: SchemaDocument

    def locate_root(self):
        """Find the message root element, raising SchemaStructureError when absent"""
        schema = self.schema

        if schema.root_tag != 'schema':
            raise SchemaStructureError("Не найден корневой элемент schema")

        if not schema.target_namespace:
            raise SchemaStructureError("Нет targetNamespace")
        logger.info(f"targetNamespace: {schema.target_namespace}")

        document = schema.find_element(DOCUMENT_ELEMENT)
        if document is None:
            raise SchemaStructureError("Не найден элемент <xs:element name='Document'/>")

        if not document.type_name.strip():
            raise SchemaStructureError("У Document нет атрибута type")
        logger.info(f"Document type: {document.type_name}")

        document_type = schema.find_complex_type(document.type_name)
        if document_type is None:
            raise SchemaStructureError(f"Не найден тип Document: {document.type_name}")

        first = self._first_sequence_element(document_type)
        if first is None:
            raise SchemaStructureError(
                "Внутри Document нет ни одного элемента в последовательности"
            )

        if not first.name.strip():
            raise SchemaStructureError("Первый элемент внутри Document не имеет атрибута name")
        if not first.type_name.strip():
            raise SchemaStructureError(f"У корневого элемента '{first.name}' нет атрибута type")

        if schema.find_complex_type(first.type_name) is None:
            raise SchemaStructureError(f"Не найден тип корневого элемента: {first.type_name}")

        logger.info(f"Message root element: {first.name}")
        return MessageRoot(
            name=first.name,
            type_name=first.type_name,
            path=f"/{DOCUMENT_ELEMENT}/{first.name}",
            required=not first.is_optional,
            target_namespace=schema.target_namespace,
            document_type=document.type_name,
        )

    def extract(self):
        """Walk the message root type and return a SchemaPaths result"""
        root = self.locate_root()
        paths = {}
        overwrites = Counter()

        root_type = self.schema.find_complex_type(root.type_name)
        self._walk(root_type, root.path, root.required, (local_name(root.type_name),), paths, overwrites)

        if overwrites:
            logger.warning(f"{len(overwrites)} schema path(s) defined more than once, last definition kept")
        logger.info(f"Extracted {len(paths)} schema paths under {root.path}")
        return SchemaPaths(root=root, paths=paths, overwrites=dict(overwrites))

    def _first_sequence_element(self, complex_type):
        for sequence in complex_type.sequences:
            if sequence.elements:
                return sequence.elements[0]
        # Sequence may be nested inside another group
        for sequence in complex_type.nested_sequences:
            if sequence.elements:
                return sequence.elements[0]
        return None

    def _walk(self, complex_type, current_path, parent_required, active_types, paths, overwrites):
        for sequence in complex_type.sequences:
            for element in sequence.elements:
                self._visit(element, current_path, parent_required and not element.is_optional,
                            active_types, paths, overwrites)

        for choice in complex_type.choices:
            for element in choice.elements:
                self._visit(element, current_path, False, active_types, paths, overwrites)

    def _visit(self, element, current_path, required, active_types, paths, overwrites):
        if not element.name:
            return

        new_path = f"{current_path}/{element.name}"

        referenced = self.schema.find_complex_type(element.type_name)
        if referenced is not None:
            type_name = local_name(element.type_name)
            if type_name in active_types:
                raise SchemaStructureError(f"Циклическая ссылка на тип: {type_name}")
            # Structural node: only its descendants become paths
            self._walk(referenced, new_path, required, active_types + (type_name,), paths, overwrites)
            return

        if new_path in paths:
            overwrites[new_path] += 1
            logger.debug(f"Schema path redefined: {new_path}")
        paths[new_path] = Cardinality.REQUIRED if required else Cardinality.OPTIONAL

        if element.anonymous_type is not None:
            self._walk(element.anonymous_type, new_path, required, active_types, paths, overwrites)


def extract_schema_paths(xsd_text):
    """Parse XSD text and return its ordered {path: Cardinality} mapping"""
    return SchemaPathExtractor(parse_schema(xsd_text)).extract().paths
