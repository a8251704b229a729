"""
Interactive HTML Report Generator
Renders a comparison as a single self-contained HTML page with search
and status filters
"""

from jinja2 import Template

from .report_generator import calculate_statistics, cardinality_label, path_status


class InteractiveHTMLGenerator:
    """Generate interactive HTML reports"""

    HTML_TEMPLATE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>XSD / SQL Comparison - {{ title }}</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif;
            background: #f5f7fa;
            color: #2c3e50;
            line-height: 1.6;
        }
        .header {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
            padding: 2rem;
        }
        .header h1 { font-size: 2rem; margin-bottom: 0.5rem; }
        .header .subtitle { opacity: 0.9; font-size: 0.9rem; }
        .container { max-width: 1400px; margin: 0 auto; padding: 2rem; }
        .dashboard {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(220px, 1fr));
            gap: 1.5rem;
            margin-bottom: 2rem;
        }
        .card {
            background: white;
            border-radius: 12px;
            padding: 1.5rem;
            box-shadow: 0 2px 8px rgba(0,0,0,0.08);
        }
        .card-title { font-size: 0.85rem; color: #7f8c8d; text-transform: uppercase; }
        .card-value { font-size: 2rem; font-weight: 700; }
        .card.critical { border-left: 4px solid #e74c3c; }
        .card.warning { border-left: 4px solid #f39c12; }
        .card.success { border-left: 4px solid #27ae60; }
        .card.info { border-left: 4px solid #3498db; }
        .controls {
            background: white;
            border-radius: 12px;
            padding: 1.5rem;
            margin-bottom: 2rem;
        }
        .search-box {
            width: 100%;
            padding: 0.75rem 1rem;
            border: 2px solid #e1e8ed;
            border-radius: 8px;
            font-size: 1rem;
        }
        .filter-buttons { display: flex; gap: 0.5rem; margin-top: 1rem; }
        .filter-btn {
            padding: 0.5rem 1rem;
            border: 2px solid #e1e8ed;
            background: white;
            border-radius: 8px;
            cursor: pointer;
        }
        .filter-btn.active { background: #667eea; color: white; border-color: #667eea; }
        table { width: 100%; border-collapse: collapse; background: white; }
        th { background: #366092; color: white; text-align: left; padding: 0.75rem; }
        td { padding: 0.6rem 0.75rem; border-bottom: 1px solid #e1e8ed; font-family: monospace; }
        .status { font-weight: 700; }
        .status-OK { color: #27ae60; }
        .status-MISMATCH { color: #f39c12; }
        .status-MISSING { color: #e74c3c; }
        .no-results { text-align: center; padding: 2rem; color: #7f8c8d; }
        .differences {
            background: white;
            border-radius: 12px;
            border-left: 4px solid #e74c3c;
            padding: 1.5rem;
            margin-bottom: 2rem;
        }
        .differences h2 { font-size: 1.2rem; margin-bottom: 0.75rem; }
        .differences li { font-family: monospace; margin-left: 1.5rem; }
    </style>
</head>
<body>
    <div class="header">
        <h1>{{ verdict }}</h1>
        <div class="subtitle">{{ subtitle }}</div>
    </div>
    <div class="container">
        <div class="dashboard">
            {% for metric, count in stats.items() %}
            <div class="card {{ card_classes.get(metric, 'info') }}">
                <div class="card-title">{{ metric }}</div>
                <div class="card-value">{{ count }}</div>
            </div>
            {% endfor %}
        </div>

        {% if differences %}
        <div class="differences" id="differencesList">
            <h2>Differences ({{ differences|length }})</h2>
            <ul>
                {% for message in differences %}
                <li>{{ message }}</li>
                {% endfor %}
            </ul>
        </div>
        {% endif %}

        <div class="controls">
            <input type="text" class="search-box" id="searchBox" placeholder="Search paths...">
            <div class="filter-buttons">
                <button class="filter-btn active" data-filter="all">All</button>
                <button class="filter-btn" data-filter="MISMATCH">Mismatch</button>
                <button class="filter-btn" data-filter="MISSING">Missing in SQL</button>
                <button class="filter-btn" data-filter="OK">OK</button>
            </div>
        </div>

        <table id="pathsTable">
            <thead>
                <tr><th>#</th><th>Path</th><th>XSD</th><th>SQL</th><th>Status</th></tr>
            </thead>
            <tbody>
                {% for row in rows %}
                <tr data-status="{{ row.status }}">
                    <td>{{ loop.index }}</td>
                    <td>{{ row.path }}</td>
                    <td>{{ row.xsd }}</td>
                    <td>{{ row.sql }}</td>
                    <td class="status status-{{ row.status }}">{{ row.status }}</td>
                </tr>
                {% endfor %}
            </tbody>
        </table>
        <div class="no-results" id="noResults" style="display: none;">
            <h3>No results found</h3>
        </div>
    </div>

    <script>
        const searchBox = document.getElementById('searchBox');
        const table = document.getElementById('pathsTable');
        const tbody = table.querySelector('tbody');
        const noResults = document.getElementById('noResults');
        let currentFilter = 'all';

        searchBox.addEventListener('input', filterTable);
        document.querySelectorAll('.filter-btn').forEach(btn => {
            btn.addEventListener('click', function() {
                document.querySelectorAll('.filter-btn').forEach(b => b.classList.remove('active'));
                this.classList.add('active');
                currentFilter = this.dataset.filter;
                filterTable();
            });
        });

        function filterTable() {
            const searchTerm = searchBox.value.toLowerCase();
            let visibleCount = 0;
            tbody.querySelectorAll('tr').forEach(row => {
                const matchesFilter = currentFilter === 'all' || row.dataset.status === currentFilter;
                const matchesSearch = searchTerm === '' || row.textContent.toLowerCase().includes(searchTerm);
                row.style.display = matchesFilter && matchesSearch ? '' : 'none';
                if (matchesFilter && matchesSearch) visibleCount++;
            });
            noResults.style.display = visibleCount === 0 ? 'block' : 'none';
        }
    </script>
</body>
</html>
    '''

    CARD_CLASSES = {
        'Total Differences': 'critical',
        'Cardinality Mismatches': 'warning',
        'Missing in SQL': 'critical',
        'Schema Paths': 'success',
    }

    def __init__(self, report, output_file):
        self.report = report
        self.output_file = output_file

    def render(self):
        """Render the report page as a string"""
        report = self.report
        rows = [
            {
                'path': path,
                'xsd': cardinality_label(xsd_value),
                'sql': cardinality_label(report.sql_paths.get(path)),
                'status': path_status(report, path),
            }
            for path, xsd_value in report.xsd_paths.items()
        ]

        subtitle = (
            f"{report.xsd_name} vs {report.sql_name} • {report.root.path} • "
            f"Generated {report.generated_at.strftime('%Y-%m-%d %H:%M')}"
        )

        template = Template(self.HTML_TEMPLATE, autoescape=True)
        return template.render(
            title=f"{report.xsd_name} vs {report.sql_name}",
            verdict='Valid' if report.result.valid else 'Differences found',
            subtitle=subtitle,
            stats=calculate_statistics(report),
            card_classes=self.CARD_CLASSES,
            rows=rows,
            differences=report.result.differences,
        )

    def generate(self):
        """Write the HTML report to disk"""
        with open(self.output_file, 'w', encoding='utf-8') as f:
            f.write(self.render())
        return self.output_file
