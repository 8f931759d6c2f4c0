from .xml_parser import XMLParser, parse_payload

__all__ = ['XMLParser', 'parse_payload']
