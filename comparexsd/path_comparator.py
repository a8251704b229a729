"""
Path comparison between XSD-derived and SQL-derived cardinalities
The comparison is driven by the schema: every schema path is checked
against the SQL mapping, SQL-only paths are never reported.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple


class Cardinality(IntEnum):
    REQUIRED = 1
    OPTIONAL = 2


MISMATCH_MESSAGE = "Расхождение для '{path}': XSD={xsd}, SQL={sql}"
# Historical format, the closing quote is missing on purpose
ABSENCE_MESSAGE = "Отсутствует в sql-файле xsdPath '{path}"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    differences: Tuple[str, ...] = ()

    def to_dict(self):
        return {'valid': self.valid, 'differences': list(self.differences)}


def compare_paths(xsd_paths: Dict[str, int], sql_paths: Dict[str, int]) -> ValidationResult:
    """
    Reconcile schema and SQL path mappings

    Mismatches are listed first in schema order, followed by paths that
    are missing from the SQL mapping, also in schema order.
    """
    differences = []
    absences = []

    for path, xsd_required in xsd_paths.items():
        if path not in sql_paths:
            absences.append(ABSENCE_MESSAGE.format(path=path))
            continue

        sql_required = sql_paths[path]
        if int(xsd_required) != int(sql_required):
            differences.append(
                MISMATCH_MESSAGE.format(path=path, xsd=int(xsd_required), sql=int(sql_required))
            )

    differences.extend(absences)
    return ValidationResult(valid=not differences, differences=tuple(differences))
