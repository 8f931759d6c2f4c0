from .filter_properties import (
    FilterProperties,
    load_filter_properties,
    get_filter_properties,
    parse_properties,
    DEFAULT_PROPERTIES_PATH
)

__all__ = [
    'FilterProperties',
    'load_filter_properties',
    'get_filter_properties',
    'parse_properties',
    'DEFAULT_PROPERTIES_PATH'
]
