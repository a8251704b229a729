"""
Validation service
Entry points that run the schema and SQL extractors and compare their
results. Each call builds its own schema model and mappings.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from .path_comparator import ValidationResult, compare_paths
from .schema_model import parse_schema
from .schema_paths import MessageRoot, SchemaPathExtractor
from .sql_paths import extract_sql_paths, find_duplicate_sql_paths
from .text_decoder import decode_text

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Validation result together with everything used to produce it"""
    result: ValidationResult
    root: MessageRoot
    xsd_paths: Dict[str, int]
    sql_paths: Dict[str, int]
    xsd_name: str = 'xsd'
    sql_name: str = 'sql'
    xsd_encoding: Optional[str] = None
    sql_encoding: Optional[str] = None
    schema_duplicates: Dict[str, int] = field(default_factory=dict)
    sql_duplicates: Dict[str, int] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def mismatches(self):
        return [d for d in self.result.differences if d.startswith('Расхождение')]

    @property
    def absences(self):
        return [d for d in self.result.differences if d.startswith('Отсутствует')]

    @property
    def sql_only_paths(self):
        """SQL paths without a schema counterpart; informational, never a difference"""
        return [p for p in self.sql_paths if p not in self.xsd_paths]


def build_report(xsd_text, sql_text, xsd_name='xsd', sql_name='sql'):
    """Compare decoded XSD and SQL text, keeping the intermediate mappings"""
    logger.info(f"Comparing {xsd_name} with {sql_name}")

    extraction = SchemaPathExtractor(parse_schema(xsd_text)).extract()
    xsd_paths = extraction.paths
    sql_paths = extract_sql_paths(sql_text)
    logger.info(f"Found {len(sql_paths)} paths in {sql_name}")

    sql_duplicates = find_duplicate_sql_paths(sql_text)
    if sql_duplicates:
        logger.warning(f"{len(sql_duplicates)} path(s) repeated in {sql_name}, last value kept")

    result = compare_paths(xsd_paths, sql_paths)
    logger.info(f"Comparison finished: valid={result.valid}, differences={len(result.differences)}")

    # Overwrite counts exclude the first definition
    schema_duplicates = {path: count + 1 for path, count in extraction.overwrites.items()}

    return ValidationReport(
        result=result,
        root=extraction.root,
        xsd_paths=xsd_paths,
        sql_paths=sql_paths,
        xsd_name=xsd_name,
        sql_name=sql_name,
        schema_duplicates=schema_duplicates,
        sql_duplicates=sql_duplicates,
    )


def validate(xsd_text, sql_text) -> ValidationResult:
    """
    Compare XSD cardinalities with the SQL mapping

    Raises:
        SchemaParseError: XSD is not well-formed
        SchemaStructureError: message root cannot be located in the XSD
    """
    return build_report(xsd_text, sql_text).result


def build_report_from_files(xsd_bytes, sql_bytes, xsd_name='xsd', sql_name='sql'):
    """Decode both uploads and build a full report"""
    xsd_text, xsd_encoding = decode_text(xsd_bytes, xsd_name)
    sql_text, sql_encoding = decode_text(sql_bytes, sql_name)

    report = build_report(xsd_text, sql_text, xsd_name, sql_name)
    report.xsd_encoding = xsd_encoding
    report.sql_encoding = sql_encoding
    return report


def validate_files(xsd_bytes, sql_bytes, xsd_name='xsd', sql_name='sql') -> ValidationResult:
    """
    Decode raw uploads and validate them

    Raises:
        DecodeError: a file could not be decoded with any candidate encoding
    """
    return build_report_from_files(xsd_bytes, sql_bytes, xsd_name, sql_name).result
