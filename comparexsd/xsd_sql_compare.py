#!/usr/bin/env python3
"""
XSD / SQL Cardinality Comparison Tool
Checks that the required/optional flags written in an SQL field mapping
match the cardinality declared by the XSD message definition.
Optionally generates Excel, Word and HTML reports.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .errors import ComparisonError
from .html_report_generator import InteractiveHTMLGenerator
from .report_generator import ValidationExcelReport, ValidationWordReport
from .validation_service import build_report_from_files

logger = logging.getLogger(__name__)

REPORT_FORMATS = ('xlsx', 'docx', 'html')

REPORT_GENERATORS = {
    'xlsx': ValidationExcelReport,
    'docx': ValidationWordReport,
    'html': InteractiveHTMLGenerator,
}

EXIT_VALID = 0
EXIT_DIFFERENCES = 1
EXIT_ERROR = 2


def write_reports(report, output_base, formats=REPORT_FORMATS):
    """
    Write report files next to each other

    Args:
        report: ValidationReport to render
        output_base: Path without extension, e.g. 'out/pacs008_check'
        formats: Any of 'xlsx', 'docx', 'html'

    Returns:
        List of written file paths
    """
    written = []
    for fmt in formats:
        generator = REPORT_GENERATORS[fmt](report, f"{output_base}.{fmt}")
        written.append(generator.generate())
        logger.info(f"Report written: {written[-1]}")
    return written


def print_report(report):
    print(f"\n{'='*70}")
    print("COMPARISON RESULTS")
    print(f"{'='*70}")
    print(f"📌 Message root: {report.root.path}")
    print(f"📋 Schema paths: {len(report.xsd_paths)}")
    print(f"🗄️  SQL paths: {len(report.sql_paths)}")

    if report.result.valid:
        print("\n✅ VALID - SQL mapping matches the XSD cardinality")
        return

    print(f"\n❌ {len(report.result.differences)} DIFFERENCES")
    for message in report.result.differences:
        print(f"   • {message}")

    for path, count in report.schema_duplicates.items():
        print(f"   ⚠️  XSD path defined {count} times: {path}")
    for path, count in report.sql_duplicates.items():
        print(f"   ⚠️  SQL path repeated {count} times: {path}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Compare XSD cardinality with an SQL field mapping',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print differences
  xsd-sql-compare camt.054.001.08.xsd camt054_mapping.sql

  # Output as JSON
  xsd-sql-compare camt.054.001.08.xsd camt054_mapping.sql --json

  # Excel report, plus Word and HTML next to it
  xsd-sql-compare camt.054.001.08.xsd camt054_mapping.sql -o report.xlsx --word --html
        """
    )

    parser.add_argument('xsd_file', help='XSD message definition')
    parser.add_argument('sql_file', help='SQL script with the field mapping')
    parser.add_argument('--json', action='store_true', help='Output result as JSON')
    parser.add_argument('-o', '--output', help='Excel report file')
    parser.add_argument('--word', action='store_true', help='Also write a Word report (needs -o)')
    parser.add_argument('--html', action='store_true', help='Also write an HTML report (needs -o)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s | %(levelname)s | %(message)s',
    )

    for file_path in (args.xsd_file, args.sql_file):
        if not Path(file_path).exists():
            print(f"❌ Error: file '{file_path}' not found")
            return EXIT_ERROR

    if not args.json:
        print(f"\n{'='*70}")
        print("XSD / SQL CARDINALITY COMPARISON")
        print(f"{'='*70}\n")
        print(f"📄 XSD: {args.xsd_file}")
        print(f"🗄️  SQL: {args.sql_file}")
        print("\n⏳ Comparing...")

    try:
        report = build_report_from_files(
            Path(args.xsd_file).read_bytes(),
            Path(args.sql_file).read_bytes(),
            xsd_name=Path(args.xsd_file).name,
            sql_name=Path(args.sql_file).name,
        )
    except ComparisonError as e:
        if args.json:
            print(json.dumps({'error': str(e), 'kind': e.kind}, ensure_ascii=False, indent=2))
        else:
            print(f"\n❌ Ошибка валидации: {e}")
        return EXIT_ERROR

    if args.json:
        print(json.dumps(report.result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print_report(report)

    if args.output:
        formats = ['xlsx']
        if args.word:
            formats.append('docx')
        if args.html:
            formats.append('html')
        output_base = str(Path(args.output).with_suffix(''))
        for written in write_reports(report, output_base, formats):
            if not args.json:
                print(f"📁 Report saved: {written}")

    return EXIT_VALID if report.result.valid else EXIT_DIFFERENCES


if __name__ == '__main__':
    sys.exit(main())
