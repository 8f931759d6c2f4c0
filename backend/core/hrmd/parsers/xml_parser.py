from typing import Optional, Tuple
import xml.etree.ElementTree as ET

from ..models.xml_elements import XMLNode, XMLDocument
from ..loaders.xml_loader import XMLLoader
from ..loaders.encoding import EncodingResolver


class XMLParser:
    """
    Convierte un árbol ElementTree en XMLDocument conservando textos tal cual.

    A diferencia de una vista normalizada, el texto no se recorta: el
    normalizador de nombres necesita ver los espacios originales.
    """

    def __init__(self):
        self._node_count = 0

    @property
    def node_count(self) -> int:
        return self._node_count

    def parse_document(self,
                       root: ET.Element,
                       source_name: Optional[str] = None,
                       encoding: Optional[str] = None) -> XMLDocument:
        self._node_count = 0

        namespaces = XMLLoader.extract_namespaces(root)
        root_node = self._parse_element(root, parent=None, sibling_order=0, depth=0)

        return XMLDocument(
            root=root_node,
            source_name=source_name,
            namespaces=namespaces,
            version="1.0",
            encoding=encoding
        )

    def parse_bytes(self,
                    payload: bytes,
                    source_name: Optional[str] = None) -> XMLDocument:
        """Atajo: bytes -> XMLDocument."""
        root = XMLLoader.load_from_bytes(payload, source_name)
        encoding = EncodingResolver.declared_encoding(payload) or 'utf-8'
        return self.parse_document(root, source_name, encoding)

    def parse_string(self,
                     xml_string: str,
                     source_name: Optional[str] = None) -> XMLDocument:
        """
        Atajo: texto -> XMLDocument.

        El texto ya está decodificado, así que la codificación declarada no
        se usa y el documento queda sin codificación propia.
        """
        root = XMLLoader.load_from_string(xml_string, source_name)
        return self.parse_document(root, source_name)

    def _parse_element(self,
                       element: ET.Element,
                       parent: Optional[XMLNode],
                       sibling_order: int,
                       depth: int) -> XMLNode:
        self._node_count += 1

        tag, namespace = self._split_tag(element.tag)

        node = XMLNode(
            tag=tag,
            attributes=dict(element.attrib),
            children=[],
            parent=parent,
            depth=depth,
            sibling_order=sibling_order,
            namespace=namespace,
            text_content=element.text,
            tail=element.tail
        )

        child_index = 0
        for child_elem in element:
            # comentarios e instrucciones de proceso no son segmentos
            if not isinstance(child_elem.tag, str):
                continue
            node.children.append(self._parse_element(
                element=child_elem,
                parent=node,
                sibling_order=child_index,
                depth=depth + 1
            ))
            child_index += 1

        return node

    @staticmethod
    def _split_tag(raw_tag: str) -> Tuple[str, Optional[str]]:
        if raw_tag.startswith('{'):
            namespace, tag = raw_tag[1:].split('}', 1)
            return tag, namespace
        return raw_tag, None


def parse_payload(payload: bytes, source_name: Optional[str] = None) -> XMLDocument:
    return XMLParser().parse_bytes(payload, source_name)

