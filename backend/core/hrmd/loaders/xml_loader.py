import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Union, Optional
import gzip

from ..exceptions.xml_exceptions import XMLValidationError, XMLParsingError
from .encoding import EncodingResolver


class XMLLoader:
    """
    Cargador de payloads HRMD_A.
    """

    @staticmethod
    def load_from_bytes(payload: bytes,
                        xml_source: Optional[str] = None) -> ET.Element:
        """
        Carga XML desde bytes.

        Sin declaración de codificación y con bytes que no son UTF-8, la
        codificación se detecta antes de parsear.
        """
        if not payload or not payload.strip():
            raise XMLValidationError("Empty XML payload", xml_source)

        try:
            if EncodingResolver.declared_encoding(payload) is None:
                try:
                    payload.decode('utf-8')
                except UnicodeDecodeError:
                    encoding = EncodingResolver.detect_encoding(payload, xml_source)
                    return ET.fromstring(payload.decode(encoding))

            return ET.fromstring(payload)

        except ET.ParseError as e:
            raise XMLValidationError(
                f"Invalid XML format: {str(e)}",
                xml_source
            )
        except XMLParsingError:
            raise
        except Exception as e:
            raise XMLParsingError(
                f"Unexpected error parsing XML payload: {str(e)}",
                xml_source
            )

    @staticmethod
    def load_from_string(xml_string: str,
                         xml_source: Optional[str] = None) -> ET.Element:
        """
        Carga XML desde string.
        """
        if not xml_string or not xml_string.strip():
            raise XMLValidationError("Empty XML string", xml_source)

        try:
            return ET.fromstring(xml_string)

        except ET.ParseError as e:
            raise XMLValidationError(
                f"Invalid XML string: {str(e)}",
                xml_source
            )
        except Exception as e:
            raise XMLParsingError(
                f"Unexpected error parsing XML string: {str(e)}",
                xml_source
            )

    @staticmethod
    def load_from_file(file_path: Union[str, Path],
                       xml_source: Optional[str] = None) -> ET.Element:
        """
        Carga XML desde archivo (.xml o .xml.gz).
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"XML file not found: {file_path}")

        if file_path.suffix == '.gz':
            with gzip.open(file_path, 'rb') as f:
                payload = f.read()
        else:
            payload = file_path.read_bytes()

        return XMLLoader.load_from_bytes(payload, xml_source or file_path.name)

    @staticmethod
    def extract_namespaces(root: ET.Element) -> Dict[str, str]:
        """
        Namespaces usados en los tags del árbol, con prefijos ns0, ns1...
        """
        namespaces: Dict[str, str] = {}

        for elem in root.iter():
            if isinstance(elem.tag, str) and elem.tag.startswith('{'):
                ns_url = elem.tag[1:].split('}', 1)[0]
                if ns_url not in namespaces.values():
                    namespaces[f"ns{len(namespaces)}"] = ns_url

        return namespaces
