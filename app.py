#!/usr/bin/env python3
"""
XSD / SQL Cardinality Comparison Web Service
Local Bank Network Deployment Version

Key Features:
- Upload an XSD message definition and its SQL field mapping
- JSON list of cardinality differences
- Excel / Word / HTML reports on request
- Configurable via environment variables or config file
- Comprehensive logging
- Health monitoring endpoints
"""

import json
import logging
import os
import sys
import time
from datetime import datetime
from pathlib import Path

from flask import Flask, jsonify, request, send_from_directory
from werkzeug.exceptions import NotFound
from werkzeug.utils import secure_filename

from comparexsd import __version__
from comparexsd.errors import ComparisonError
from comparexsd.validation_service import build_report_from_files, validate_files
from comparexsd.xsd_sql_compare import REPORT_FORMATS, write_reports

# ============================================================================
# CONFIGURATION
# ============================================================================

def load_config():
    """Load configuration from file or environment variables"""
    config = {
        # Server settings
        'HOST': os.environ.get('COMPAREXSD_HOST', '0.0.0.0'),
        'PORT': int(os.environ.get('COMPAREXSD_PORT', '8080')),
        'DEBUG': os.environ.get('COMPAREXSD_DEBUG', 'False').lower() == 'true',

        # Security
        'SECRET_KEY': os.environ.get('COMPAREXSD_SECRET_KEY', 'change-this-in-production-' + os.urandom(16).hex()),
        'MAX_CONTENT_LENGTH': int(os.environ.get('COMPAREXSD_MAX_UPLOAD_MB', '50')) * 1024 * 1024,

        # Folders
        'OUTPUT_FOLDER': os.environ.get('COMPAREXSD_OUTPUT_FOLDER', 'static/outputs'),
        'LOG_FOLDER': os.environ.get('COMPAREXSD_LOG_FOLDER', 'logs'),

        # Housekeeping
        'CLEANUP_HOURS': int(os.environ.get('COMPAREXSD_CLEANUP_HOURS', '24')),
    }

    # Load from config file if exists
    config_file = Path(os.environ.get('COMPAREXSD_CONFIG_FILE', 'config.json'))
    if config_file.exists():
        try:
            with open(config_file, encoding='utf-8') as f:
                config.update(json.load(f))
        except (OSError, ValueError) as e:
            print(f"Warning: Could not load {config_file}: {e}")

    return config

# Load configuration
CONFIG = load_config()

# ============================================================================
# LOGGING SETUP
# ============================================================================

def setup_logging():
    """Configure comprehensive logging"""
    log_folder = Path(CONFIG['LOG_FOLDER'])
    log_folder.mkdir(parents=True, exist_ok=True)

    log_file = log_folder / f"comparexsd_{datetime.now().strftime('%Y%m%d')}.log"

    logging.basicConfig(
        level=logging.DEBUG if CONFIG['DEBUG'] else logging.INFO,
        format='%(asctime)s | %(levelname)s | %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

    return logging.getLogger(__name__)

logger = setup_logging()

# ============================================================================
# FLASK APP
# ============================================================================

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = CONFIG['MAX_CONTENT_LENGTH']
app.config['OUTPUT_FOLDER'] = CONFIG['OUTPUT_FOLDER']
app.secret_key = CONFIG['SECRET_KEY']

os.makedirs(CONFIG['OUTPUT_FOLDER'], exist_ok=True)

ERROR_STATUS = {
    'decode': 400,
    'parse': 400,
    'schema': 422,
}

# ============================================================================
# UTILITIES
# ============================================================================

def read_uploads():
    """Return (xsd_bytes, sql_bytes, xsd_name, sql_name) or None when a field is missing"""
    xsd = request.files.get('xsd')
    sql = request.files.get('sql')
    if xsd is None or sql is None:
        return None

    xsd_name = secure_filename(xsd.filename or '') or 'xsd'
    sql_name = secure_filename(sql.filename or '') or 'sql'
    return xsd.read(), sql.read(), xsd_name, sql_name


def error_response(error):
    """JSON failure response that keeps the error kind"""
    logger.warning(f"Validation failed ({error.kind}): {error}")
    status = ERROR_STATUS.get(error.kind, 400)
    return jsonify({'error': f"Ошибка валидации: {error}", 'kind': error.kind}), status


def cleanup_old_files():
    """Remove generated reports older than configured hours"""
    cutoff = time.time() - (CONFIG['CLEANUP_HOURS'] * 3600)
    removed = 0

    folder_path = Path(CONFIG['OUTPUT_FOLDER'])
    if folder_path.exists():
        for file_path in folder_path.iterdir():
            if file_path.is_file() and file_path.stat().st_mtime < cutoff:
                file_path.unlink()
                removed += 1
                logger.info(f"Cleaned up old file: {file_path.name}")

    return removed

# ============================================================================
# ROUTES
# ============================================================================

@app.after_request
def allow_any_origin(response):
    response.headers['Access-Control-Allow-Origin'] = '*'
    response.headers['Access-Control-Max-Age'] = '3600'
    return response


@app.route('/api/validate', methods=['POST'])
def validate():
    """Compare uploaded XSD and SQL files"""
    uploads = read_uploads()
    if uploads is None:
        logger.warning("Validation attempted without both files")
        return jsonify({'error': "Both 'xsd' and 'sql' files are required"}), 400

    xsd_bytes, sql_bytes, xsd_name, sql_name = uploads
    logger.info(f"Validation request started: {xsd_name}, {sql_name}")

    try:
        result = validate_files(xsd_bytes, sql_bytes, xsd_name, sql_name)
    except ComparisonError as e:
        return error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected validation error: {e}")
        return jsonify({'error': f"Ошибка валидации: {e}", 'kind': 'internal'}), 500

    logger.info(f"Validation request finished: valid={result.valid}")
    return jsonify(result.to_dict())


@app.route('/api/report', methods=['POST'])
def report():
    """Compare uploaded files and write report files for download"""
    uploads = read_uploads()
    if uploads is None:
        return jsonify({'error': "Both 'xsd' and 'sql' files are required"}), 400

    requested = request.form.get('format', 'all').lower()
    if requested == 'all':
        formats = REPORT_FORMATS
    elif requested in REPORT_FORMATS:
        formats = (requested,)
    else:
        return jsonify({'error': f'Unknown report format: {requested}'}), 400

    xsd_bytes, sql_bytes, xsd_name, sql_name = uploads
    try:
        validation = build_report_from_files(xsd_bytes, sql_bytes, xsd_name, sql_name)
    except ComparisonError as e:
        return error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected report error: {e}")
        return jsonify({'error': f"Ошибка валидации: {e}", 'kind': 'internal'}), 500

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
    output_base = os.path.join(CONFIG['OUTPUT_FOLDER'], f"{Path(xsd_name).stem}_{timestamp}")
    written = write_reports(validation, output_base, formats)

    return jsonify({
        'success': True,
        'valid': validation.result.valid,
        'differences': list(validation.result.differences),
        'files': [os.path.basename(f) for f in written],
    })


@app.route('/download/<filename>')
def download_file(filename):
    """Download generated file"""
    logger.info(f"File download: {filename}")
    try:
        return send_from_directory(os.path.abspath(CONFIG['OUTPUT_FOLDER']), filename, as_attachment=True)
    except NotFound:
        logger.error(f"Download error for {filename}: not found")
        return "File not found", 404


@app.route('/preview/<filename>')
def preview_file(filename):
    """Preview HTML files in browser"""
    if not filename.endswith('.html'):
        return "Only HTML files can be previewed", 400
    try:
        return send_from_directory(os.path.abspath(CONFIG['OUTPUT_FOLDER']), filename)
    except NotFound:
        return "File not found", 404

# ============================================================================
# MONITORING ENDPOINTS
# ============================================================================

@app.route('/health')
def health():
    """Health check endpoint for monitoring"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'version': __version__
    })


@app.route('/status')
def status():
    """Detailed status endpoint"""
    output_count = len(list(Path(CONFIG['OUTPUT_FOLDER']).glob('*')))

    return jsonify({
        'status': 'running',
        'timestamp': datetime.now().isoformat(),
        'version': __version__,
        'config': {
            'host': CONFIG['HOST'],
            'port': CONFIG['PORT'],
            'max_upload_mb': CONFIG['MAX_CONTENT_LENGTH'] // (1024 * 1024),
            'cleanup_hours': CONFIG['CLEANUP_HOURS']
        },
        'files': {
            'outputs': output_count
        }
    })


@app.route('/cleanup', methods=['POST'])
def trigger_cleanup():
    """Manual cleanup trigger"""
    try:
        removed = cleanup_old_files()
    except OSError as e:
        logger.error(f"Cleanup error: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500
    return jsonify({'success': True, 'message': 'Cleanup completed', 'removed': removed})

# ============================================================================
# MAIN
# ============================================================================

def main():
    print(f"""
    ======================================================================
       XSD / SQL CARDINALITY COMPARISON - LOCAL DEPLOYMENT

       URL: http://{CONFIG['HOST']}:{CONFIG['PORT']}

       Endpoints:
         POST /api/validate  - Compare XSD and SQL (files: xsd, sql)
         POST /api/report    - Same, plus Excel/Word/HTML reports
         /health             - Health check
         /status             - Detailed status
         /cleanup            - Trigger report cleanup

       Press Ctrl+C to stop
    ======================================================================
    """)

    logger.info(f"Starting comparison service on {CONFIG['HOST']}:{CONFIG['PORT']}")

    try:
        cleanup_old_files()
    except OSError as e:
        logger.error(f"Cleanup error: {e}")

    app.run(
        host=CONFIG['HOST'],
        port=CONFIG['PORT'],
        debug=CONFIG['DEBUG'],
        threaded=True
    )


if __name__ == '__main__':
    main()
