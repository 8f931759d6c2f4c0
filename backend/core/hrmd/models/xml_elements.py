from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass(eq=False)
class XMLNode:
    """
    Nodo mutable del IDoc con hijos ordenados y referencia al padre.

    Los nodos se comparan por identidad: dos segmentos con el mismo
    contenido siguen siendo segmentos distintos del documento.
    """
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List[XMLNode] = field(default_factory=list)
    parent: Optional[XMLNode] = field(default=None, repr=False)
    depth: int = 0
    sibling_order: int = 0
    namespace: Optional[str] = None
    text_content: Optional[str] = None
    tail: Optional[str] = field(default=None, repr=False)

    def iter(self) -> Iterator[XMLNode]:
        """Recorre el nodo y sus descendientes en orden de documento."""
        yield self
        for child in self.children:
            yield from child.iter()

    def itertext(self) -> Iterator[str]:
        if self.text_content:
            yield self.text_content
        for child in self.children:
            yield from child.itertext()
            if child.tail:
                yield child.tail

    def find_nodes_by_tag(self, tag: str) -> List[XMLNode]:
        """Descendientes (sin incluir el propio nodo) cuyo tag es exactamente `tag`."""
        return [node for node in self.iter() if node is not self and node.tag == tag]

    def find_first(self, tag: str) -> Optional[XMLNode]:
        for node in self.iter():
            if node is not self and node.tag == tag:
                return node
        return None

    def get_text(self, tag: str) -> str:
        """Texto del primer descendiente con ese tag, o '' si no existe."""
        node = self.find_first(tag)
        if node is None:
            return ""
        return "".join(node.itertext())

    def set_text(self, tag: str, content: str) -> bool:
        """
        Reemplaza el contenido del primer descendiente con ese tag.

        Si el campo no existe no se crea; devuelve False.
        """
        node = self.find_first(tag)
        if node is None:
            return False
        node.children = []
        node.text_content = content
        return True

    def remove_child(self, child: XMLNode) -> None:
        self.children = [c for c in self.children if c is not child]
        child.parent = None

    def detach(self) -> bool:
        """Quita el nodo de su padre. Devuelve False si ya estaba suelto."""
        if self.parent is None:
            return False
        self.parent.remove_child(self)
        return True

    def remove_descendants(self, tag: str) -> List[XMLNode]:
        """Elimina todos los descendientes con ese tag; devuelve los eliminados."""
        removed = self.find_nodes_by_tag(tag)
        for node in removed:
            node.detach()
        return removed

    def find_ancestor(self, tag: str) -> Optional[XMLNode]:
        current = self.parent
        while current is not None:
            if current.tag == tag:
                return current
            current = current.parent
        return None

    def is_attached_to(self, root: XMLNode) -> bool:
        current = self
        while current.parent is not None:
            current = current.parent
        return current is root


@dataclass
class XMLDocument:
    """
    Documento IDoc completo con metadata del payload original.
    """
    root: XMLNode
    source_name: Optional[str] = None
    namespaces: Dict[str, str] = field(default_factory=dict)
    version: Optional[str] = None
    encoding: Optional[str] = None

    def iter_nodes_by_tag(self, tag: str) -> List[XMLNode]:
        """
        Lista fija de nodos con ese tag, tomada antes de cualquier mutación.
        """
        return [node for node in self.root.iter() if node.tag == tag]

    def normalize(self) -> None:
        """
        Vuelve a enlazar padres y recalcula profundidad y orden entre hermanos.

        Textos vacíos se convierten en None.
        """
        self.root.parent = None
        self._normalize_node(self.root, depth=0, sibling_order=0)

    def _normalize_node(self, node: XMLNode, depth: int, sibling_order: int) -> None:
        node.depth = depth
        node.sibling_order = sibling_order
        if node.text_content == "":
            node.text_content = None
        if node.tail == "":
            node.tail = None

        for i, child in enumerate(node.children):
            child.parent = node
            self._normalize_node(child, depth + 1, i)
