from .xml_elements import XMLNode, XMLDocument
from .routing import DynamicConfiguration, RoutingContext
from .report import FilterReport, SegmentDecision, PersonDecision

__all__ = [
    'XMLNode',
    'XMLDocument',
    'DynamicConfiguration',
    'RoutingContext',
    'FilterReport',
    'SegmentDecision',
    'PersonDecision'
]
