from .xml_loader import XMLLoader
from .encoding import EncodingResolver

__all__ = ['XMLLoader', 'EncodingResolver']
