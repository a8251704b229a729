"""
Cardinality comparison reports
Generates Excel and Word renditions of a ValidationReport
"""

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

HEADER_FILL = PatternFill(start_color='366092', end_color='366092', fill_type='solid')
MISMATCH_FILL = PatternFill(start_color='FFA500', end_color='FFA500', fill_type='solid')
ABSENCE_FILL = PatternFill(start_color='FF0000', end_color='FF0000', fill_type='solid')
OK_FILL = PatternFill(start_color='90EE90', end_color='90EE90', fill_type='solid')

CARDINALITY_LABELS = {1: 'Required', 2: 'Optional'}


def cardinality_label(value):
    if value is None:
        return 'NOT PRESENT'
    return f"{int(value)} ({CARDINALITY_LABELS.get(int(value), 'Unknown')})"


def path_status(report, path):
    """Status of a schema path: OK, MISMATCH or MISSING"""
    if path not in report.sql_paths:
        return 'MISSING'
    if int(report.sql_paths[path]) != int(report.xsd_paths[path]):
        return 'MISMATCH'
    return 'OK'


def calculate_statistics(report):
    return {
        'Schema Paths': len(report.xsd_paths),
        'SQL Paths': len(report.sql_paths),
        'Total Differences': len(report.result.differences),
        'Cardinality Mismatches': len(report.mismatches),
        'Missing in SQL': len(report.absences),
        'SQL-only Paths (not reported)': len(report.sql_only_paths),
        'Duplicate Schema Paths': len(report.schema_duplicates),
        'Duplicate SQL Paths': len(report.sql_duplicates),
    }


class ValidationExcelReport:
    """Generate the Excel workbook for a comparison"""

    def __init__(self, report, output_file):
        self.report = report
        self.output_file = output_file
        self.wb = Workbook()

    def generate(self):
        """Generate all sheets and save the workbook"""
        if 'Sheet' in self.wb.sheetnames:
            self.wb.remove(self.wb['Sheet'])

        self._create_summary_sheet()
        self._create_differences_sheet()
        self._create_schema_paths_sheet()
        self._create_sql_paths_sheet()
        self._create_duplicates_sheet()

        self.wb.save(self.output_file)
        return self.output_file

    def _style_header(self, ws):
        for cell in ws[1]:
            cell.font = Font(bold=True, color='FFFFFF')
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal='center', vertical='center')

    def _create_summary_sheet(self):
        ws = self.wb.create_sheet("Summary", 0)

        ws['A1'] = "XSD / SQL Cardinality Comparison - Summary"
        ws['A1'].font = Font(size=16, bold=True, color='FFFFFF')
        ws['A1'].fill = HEADER_FILL
        ws.merge_cells('A1:D1')

        root = self.report.root
        metadata = [
            ("Report Generated:", self.report.generated_at.strftime("%Y-%m-%d %H:%M:%S")),
            ("XSD File:", self.report.xsd_name),
            ("SQL File:", self.report.sql_name),
            ("XSD Encoding:", self.report.xsd_encoding or 'N/A'),
            ("SQL Encoding:", self.report.sql_encoding or 'N/A'),
            ("targetNamespace:", root.target_namespace),
            ("Message Root:", root.path),
            ("Result:", 'VALID' if self.report.result.valid else 'DIFFERENCES FOUND'),
        ]

        row = 3
        for label, value in metadata:
            ws[f'A{row}'] = label
            ws[f'B{row}'] = value
            ws[f'A{row}'].font = Font(bold=True)
            row += 1

        ws[f'B{row - 1}'].fill = OK_FILL if self.report.result.valid else ABSENCE_FILL

        row += 1
        ws[f'A{row}'] = "STATISTICS"
        ws[f'A{row}'].font = Font(size=12, bold=True)
        row += 1
        for metric, count in calculate_statistics(self.report).items():
            ws[f'A{row}'] = metric
            ws[f'B{row}'] = count
            row += 1

        ws.column_dimensions['A'].width = 32
        ws.column_dimensions['B'].width = 70

    def _create_differences_sheet(self):
        ws = self.wb.create_sheet("Differences")
        ws.append(['#', 'Kind', 'Message'])
        self._style_header(ws)

        mismatches = set(self.report.mismatches)
        for number, message in enumerate(self.report.result.differences, 1):
            kind = 'MISMATCH' if message in mismatches else 'MISSING'
            ws.append([number, kind, message])
            ws[f'B{ws.max_row}'].fill = MISMATCH_FILL if kind == 'MISMATCH' else ABSENCE_FILL
            ws[f'C{ws.max_row}'].alignment = Alignment(wrap_text=True, vertical='top')

        ws.column_dimensions['A'].width = 6
        ws.column_dimensions['B'].width = 12
        ws.column_dimensions['C'].width = 110
        ws.freeze_panes = 'A2'
        ws.auto_filter.ref = f"A1:C{ws.max_row}"

    def _create_schema_paths_sheet(self):
        """One row per schema leaf, in schema order"""
        ws = self.wb.create_sheet("Schema Paths")
        ws.append(['Path', 'XSD', 'SQL', 'Status'])
        self._style_header(ws)

        fills = {'OK': OK_FILL, 'MISMATCH': MISMATCH_FILL, 'MISSING': ABSENCE_FILL}
        for path, xsd_value in self.report.xsd_paths.items():
            status = path_status(self.report, path)
            ws.append([
                path,
                cardinality_label(xsd_value),
                cardinality_label(self.report.sql_paths.get(path)),
                status,
            ])
            ws[f'D{ws.max_row}'].fill = fills[status]

        ws.column_dimensions['A'].width = 90
        ws.column_dimensions['B'].width = 16
        ws.column_dimensions['C'].width = 16
        ws.column_dimensions['D'].width = 12
        ws.freeze_panes = 'A2'
        ws.auto_filter.ref = f"A1:D{ws.max_row}"

    def _create_sql_paths_sheet(self):
        ws = self.wb.create_sheet("SQL Paths")
        ws.append(['Path', 'SQL', 'In Schema'])
        self._style_header(ws)

        for path, sql_value in sorted(self.report.sql_paths.items()):
            ws.append([path, sql_value, 'YES' if path in self.report.xsd_paths else 'NO'])

        ws.column_dimensions['A'].width = 90
        ws.column_dimensions['B'].width = 8
        ws.column_dimensions['C'].width = 12
        ws.freeze_panes = 'A2'

    def _create_duplicates_sheet(self):
        ws = self.wb.create_sheet("Duplicates")
        ws.append(['Source', 'Path', 'Occurrences'])
        self._style_header(ws)

        for path, count in self.report.schema_duplicates.items():
            ws.append(['XSD', path, count])
        for path, count in self.report.sql_duplicates.items():
            ws.append(['SQL', path, count])

        ws.column_dimensions['A'].width = 8
        ws.column_dimensions['B'].width = 90
        ws.column_dimensions['C'].width = 14


class ValidationWordReport:
    """Generate the Word document for a comparison"""

    def __init__(self, report, output_file):
        self.report = report
        self.output_file = output_file
        self.doc = Document()

    def generate(self):
        self._add_title_page()
        self._add_summary()
        self._add_mismatches()
        self._add_absences()
        self._add_duplicates()

        self.doc.save(self.output_file)
        return self.output_file

    def _add_title_page(self):
        title = self.doc.add_heading('XSD / SQL Cardinality Comparison Report', 0)
        title.alignment = WD_ALIGN_PARAGRAPH.CENTER

        for line in (
            f"XSD: {self.report.xsd_name}",
            'vs',
            f"SQL: {self.report.sql_name}",
            f"Generated: {self.report.generated_at.strftime('%Y-%m-%d')}",
        ):
            self.doc.add_paragraph()
            p = self.doc.add_paragraph(line)
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER

        self.doc.add_page_break()

    def _add_summary(self):
        self.doc.add_heading('Summary', 1)

        verdict = 'VALID' if self.report.result.valid else 'DIFFERENCES FOUND'
        p = self.doc.add_paragraph()
        p.add_run('Result: ').bold = True
        p.add_run(verdict)

        p = self.doc.add_paragraph()
        p.add_run('Message root: ').bold = True
        p.add_run(self.report.root.path)

        table = self.doc.add_table(rows=1, cols=2)
        table.style = 'Light Grid Accent 1'
        header = table.rows[0].cells
        header[0].text = 'Metric'
        header[1].text = 'Count'
        for metric, count in calculate_statistics(self.report).items():
            cells = table.add_row().cells
            cells[0].text = metric
            cells[1].text = str(count)

    def _add_mismatches(self):
        mismatches = self.report.mismatches
        if not mismatches:
            return

        self.doc.add_heading('Cardinality Mismatches', 2)
        self.doc.add_paragraph(f"Found {len(mismatches)} mismatches:")
        for message in mismatches:
            self.doc.add_paragraph(message, style='List Bullet')

    def _add_absences(self):
        absences = self.report.absences
        if not absences:
            return

        self.doc.add_heading('Missing in SQL', 2)
        self.doc.add_paragraph(f"{len(absences)} schema paths have no SQL mapping:")
        for message in absences:
            self.doc.add_paragraph(message, style='List Bullet')

    def _add_duplicates(self):
        if not (self.report.schema_duplicates or self.report.sql_duplicates):
            return

        self.doc.add_heading('Duplicate Paths', 2)
        self.doc.add_paragraph("Only the last definition of each path was compared.")
        for path, count in self.report.schema_duplicates.items():
            self.doc.add_paragraph(f"XSD: {path} ({count}x)", style='List Bullet')
        for path, count in self.report.sql_duplicates.items():
            self.doc.add_paragraph(f"SQL: {path} ({count}x)", style='List Bullet')
