from typing import Optional


class XMLParsingError(Exception):
    """Base error for everything that goes wrong while reading an IDoc payload."""

    def __init__(self, message: str, xml_source: Optional[str] = None):
        self.xml_source = xml_source
        self.instance_context = f" (XML: {xml_source})" if xml_source else ""
        super().__init__(f"{message}{self.instance_context}")


class XMLValidationError(XMLParsingError):
    """Payload is not well-formed XML."""

    def __init__(self, message: str, xml_source: Optional[str] = None):
        super().__init__(f"XML validation failed: {message}", xml_source)


class XMLSerializationError(XMLParsingError):
    """The filtered tree could not be written back to bytes."""

    def __init__(self, message: str, xml_source: Optional[str] = None):
        super().__init__(f"XML serialization failed: {message}", xml_source)


class FilterConfigurationError(Exception):
    """Required filter properties are missing or unreadable."""

    def __init__(self, message: str, property_key: Optional[str] = None):
        self.property_key = property_key
        context = f" for property: {property_key}" if property_key else ""
        super().__init__(f"Filter configuration error: {message}{context}")
