"""
Text decoding for uploaded XSD and SQL files.
Tries a fixed list of encodings and keeps the first one that decodes
without error.
"""

import codecs
import logging

from .errors import DecodeError

logger = logging.getLogger(__name__)

UTF8_BOM = 'utf-8-bom'

ENCODINGS = ('utf-8', UTF8_BOM, 'windows-1251', 'cp1251', 'iso-8859-1')


def decode_text(raw, file_name='file', encodings=ENCODINGS):
    """
    Decode raw file bytes into text

    Args:
        raw: File contents
        file_name: Name used in the error message when nothing fits
        encodings: Candidate encodings, tried in order

    Returns:
        Tuple of (text, encoding that succeeded)
    """
    for encoding in encodings:
        if encoding == UTF8_BOM:
            if not raw.startswith(codecs.BOM_UTF8):
                continue
            codec = 'utf-8-sig'
        else:
            # BOM-prefixed input is left for the BOM-stripping candidate
            if encoding == 'utf-8' and raw.startswith(codecs.BOM_UTF8) and UTF8_BOM in encodings:
                continue
            codec = encoding

        try:
            text = raw.decode(codec)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"{file_name}: not decodable as {encoding}")
            continue

        logger.debug(f"{file_name}: decoded as {encoding}")
        return text, encoding

    raise DecodeError(file_name, encodings)
