from .models.xml_elements import XMLNode, XMLDocument
from .models.routing import DynamicConfiguration, RoutingContext
from .models.report import FilterReport
from .exceptions.xml_exceptions import (
    XMLParsingError,
    XMLValidationError,
    XMLSerializationError,
    FilterConfigurationError
)
from .config.filter_properties import FilterProperties, load_filter_properties, get_filter_properties
from .loaders.xml_loader import XMLLoader
from .parsers.xml_parser import XMLParser, parse_payload
from .writers.xml_writer import XMLWriter
from .filters.infotype_filter import InfotypeFilter
from .filters.ownership_filter import OwnershipFilter
from .normalizers.name_normalizer import NameNormalizer
from .orchestrator import HRMDFilterOrchestrator, TransformResult, create_orchestrator, run_filter

__version__ = "1.0.0"
__all__ = [
    'XMLNode',
    'XMLDocument',
    'DynamicConfiguration',
    'RoutingContext',
    'FilterReport',
    'XMLParsingError',
    'XMLValidationError',
    'XMLSerializationError',
    'FilterConfigurationError',
    'FilterProperties',
    'load_filter_properties',
    'get_filter_properties',
    'XMLLoader',
    'XMLParser',
    'parse_payload',
    'XMLWriter',
    'InfotypeFilter',
    'OwnershipFilter',
    'NameNormalizer',
    'HRMDFilterOrchestrator',
    'TransformResult',
    'create_orchestrator',
    'run_filter'
]
