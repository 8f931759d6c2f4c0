import pytest

from backend.core.hrmd.config.filter_properties import FilterProperties
from backend.core.hrmd.models.routing import DynamicConfiguration, RoutingContext
from backend.core.hrmd.parsers.xml_parser import parse_payload


@pytest.fixture
def properties():
    return FilterProperties(
        management_infotypes=["1000", "1001"],
        employee_infotypes=["0001", "0002"]
    )


@pytest.fixture
def make_context():
    def _make(receiver="SYS_A", ownership=None):
        if ownership is None:
            ownership = {"1000": "SYS_A", "2000": "SYS_B"}
        return RoutingContext(
            receiver_service=receiver,
            dynamic_configuration=DynamicConfiguration.from_mapping(ownership)
        )
    return _make


@pytest.fixture
def parse():
    return parse_payload
