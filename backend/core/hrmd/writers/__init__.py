from .xml_writer import XMLWriter

__all__ = ['XMLWriter']
