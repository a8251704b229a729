"""
SQL path extraction
Pulls `/Document/...` paths and the cardinality that follows them out of
free-form SQL text, e.g.

    insert into msg_fields values ('/Document/BkToCstmrDbtCdtNtfctn/GrpHdr/MsgId', 'MsgId', 1);
"""

import re
from collections import Counter

SQL_PATH_PATTERN = re.compile(r"(/Document/[^']+)'[^,]*,\D*(\d+)", re.IGNORECASE | re.ASCII)


def extract_sql_paths(sql_text):
    """
    Map every quoted `/Document/...` path to the integer that follows it

    The integer is stored as written, it is not limited to 1 and 2.
    A path that occurs more than once keeps its last value. Text without
    any match gives an empty mapping.
    """
    paths = {}
    for match in SQL_PATH_PATTERN.finditer(sql_text):
        paths[match.group(1)] = int(match.group(2))
    return paths


def find_duplicate_sql_paths(sql_text):
    """Paths matched more than once, with their occurrence counts"""
    counts = Counter(match.group(1) for match in SQL_PATH_PATTERN.finditer(sql_text))
    return {path: count for path, count in counts.items() if count > 1}
