"""
Errors raised while comparing an XSD schema with an SQL mapping.
Every error aborts the whole comparison; nothing is retried.
"""


class ComparisonError(Exception):
    """Base class for all comparison failures"""

    kind = 'error'


class DecodeError(ComparisonError):
    """None of the candidate encodings could decode an input file"""

    kind = 'decode'

    def __init__(self, file_name, encodings):
        self.file_name = file_name
        self.encodings = tuple(encodings)
        super().__init__(
            f"Не удалось прочитать {file_name}: ни одна из кодировок "
            f"{', '.join(self.encodings)} не подошла"
        )


class SchemaParseError(ComparisonError):
    """XSD text is not well-formed XML"""

    kind = 'parse'


class SchemaStructureError(ComparisonError):
    """XSD is well-formed but lacks a construct needed to locate the message"""

    kind = 'schema'
