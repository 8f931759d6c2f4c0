from .xml_exceptions import (
    XMLParsingError,
    XMLValidationError,
    XMLSerializationError,
    FilterConfigurationError
)

__all__ = [
    'XMLParsingError',
    'XMLValidationError',
    'XMLSerializationError',
    'FilterConfigurationError'
]
