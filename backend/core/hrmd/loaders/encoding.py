# loaders/encoding.py
"""
Resolución de codificación para payloads IDoc sin declaración XML.
"""

import re
from typing import Optional

import chardet

from ..exceptions.xml_exceptions import XMLValidationError


class EncodingResolver:
    """Detecta la codificación de un payload en bytes."""

    # Orden de prioridad para el fallback; cp1251 antes que cp1252 por los nombres cirílicos
    ENCODING_PRIORITY = ['utf-8-sig', 'utf-8', 'cp1251', 'cp1252', 'latin-1']

    DECLARATION_PATTERN = re.compile(rb'^\s*<\?xml[^>]*encoding\s*=\s*["\']([A-Za-z0-9._-]+)["\']')

    ENCODING_MAP = {
        'ascii': 'utf-8',
        'windows-1251': 'cp1251',
        'windows-1252': 'cp1252',
        'iso-8859-1': 'latin-1'
    }

    @classmethod
    def declared_encoding(cls, payload: bytes) -> Optional[str]:
        """Codificación de la declaración <?xml ... ?>, si la hay."""
        match = cls.DECLARATION_PATTERN.match(payload[:200])
        if match:
            return match.group(1).decode('ascii').lower()
        return None

    @classmethod
    def detect_encoding(cls, payload: bytes, xml_source: Optional[str] = None) -> str:
        """
        Detecta la codificación de un payload sin declaración.

        Primero chardet, luego cada codificación de ENCODING_PRIORITY.
        """
        if not payload:
            raise XMLValidationError("Empty XML payload", xml_source)

        sample = payload[:10000]
        result = chardet.detect(sample)
        detected_encoding = (result.get('encoding') or '').lower()
        confidence = result.get('confidence') or 0

        if confidence > 0.7 and detected_encoding:
            normalized = cls.ENCODING_MAP.get(detected_encoding, detected_encoding)
            try:
                payload.decode(normalized, errors='strict')
                return normalized
            except (UnicodeDecodeError, LookupError):
                pass

        for encoding in cls.ENCODING_PRIORITY:
            try:
                payload.decode(encoding, errors='strict')
                return encoding
            except (UnicodeDecodeError, LookupError):
                continue

        raise XMLValidationError("Could not detect payload encoding", xml_source)
