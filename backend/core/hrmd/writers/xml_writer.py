import xml.etree.ElementTree as ET
from typing import Optional

from ..models.xml_elements import XMLNode, XMLDocument
from ..exceptions.xml_exceptions import XMLSerializationError


class XMLWriter:
    """
    Serializa un XMLDocument de vuelta a bytes.
    """

    DEFAULT_ENCODING = 'utf-8'
    TEXT_DECLARATION = '<?xml version="1.0"?>\n'

    def to_bytes(self,
                 document: XMLDocument,
                 encoding: Optional[str] = None) -> bytes:
        encoding = encoding or document.encoding or self.DEFAULT_ENCODING

        try:
            root = self._build_element(document.root)
            return ET.tostring(root, encoding=encoding, xml_declaration=True)
        except (LookupError, UnicodeError, TypeError, ValueError) as e:
            raise XMLSerializationError(str(e), document.source_name)

    def to_string(self, document: XMLDocument) -> str:
        """
        Texto XML con declaración sin 'encoding': quien lo reciba decide
        cómo codificarlo.
        """
        try:
            root = self._build_element(document.root)
            return self.TEXT_DECLARATION + ET.tostring(root, encoding='unicode')
        except (TypeError, ValueError) as e:
            raise XMLSerializationError(str(e), document.source_name)

    def _build_element(self, node: XMLNode) -> ET.Element:
        tag = f"{{{node.namespace}}}{node.tag}" if node.namespace else node.tag
        element = ET.Element(tag, dict(node.attributes))
        element.text = node.text_content
        element.tail = node.tail

        for child in node.children:
            element.append(self._build_element(child))

        return element
