"""
XSD / SQL cardinality comparison toolkit
Checks that an SQL field mapping agrees with the required/optional
cardinality declared by an ISO 20022 style XSD message definition.
"""

from .errors import ComparisonError, DecodeError, SchemaParseError, SchemaStructureError
from .path_comparator import Cardinality, ValidationResult, compare_paths
from .validation_service import ValidationReport, build_report, validate, validate_files

__version__ = '1.0.0'

__all__ = [
    'Cardinality',
    'ComparisonError',
    'DecodeError',
    'SchemaParseError',
    'SchemaStructureError',
    'ValidationReport',
    'ValidationResult',
    'build_report',
    'compare_paths',
    'validate',
    'validate_files',
]
