import gzip

import pytest

from backend.core.hrmd.exceptions.xml_exceptions import XMLValidationError, XMLSerializationError
from backend.core.hrmd.loaders import encoding as encoding_module
from backend.core.hrmd.loaders.encoding import EncodingResolver
from backend.core.hrmd.loaders.xml_loader import XMLLoader
from backend.core.hrmd.parsers.xml_parser import XMLParser
from backend.core.hrmd.writers.xml_writer import XMLWriter

from idoc_builders import idoc, standard_person

PRETTY_IDOC = b"""<?xml version="1.0" encoding="UTF-8"?>
<ns0:HRMD_A09 xmlns:ns0="urn:sap-com:document:sap:idoc:messages">
    <IDOC BEGIN="1">
        <E1PLOGI SEGMENT="1">
            <OBJID>00001001</OBJID>
            <E1PITYP SEGMENT="1">
                <OBJID>00001001</OBJID>
                <INFTY>0002</INFTY>
                <E1P0002 SEGMENT="1">
                    <NACHN>  Smith  </NACHN>
                </E1P0002>
            </E1PITYP>
        </E1PLOGI>
    </IDOC>
</ns0:HRMD_A09>
"""


def test_parser_keeps_raw_text_and_namespace():
    document = XMLParser().parse_bytes(PRETTY_IDOC, "test")

    assert document.root.tag == "HRMD_A09"
    assert document.root.namespace == "urn:sap-com:document:sap:idoc:messages"
    assert document.root.get_text("NACHN") == "  Smith  "
    assert document.encoding == "utf-8"
    assert document.source_name == "test"


def test_get_and_set_text_follow_first_descendant():
    document = XMLParser().parse_bytes(PRETTY_IDOC)
    segment = document.iter_nodes_by_tag("E1PITYP")[0]

    assert segment.get_text("OBJID") == "00001001"
    assert segment.get_text("MISSING") == ""
    assert segment.set_text("NACHN", "Smith") is True
    assert segment.set_text("MISSING", "x") is False
    assert segment.find_first("MISSING") is None
    assert segment.get_text("NACHN") == "Smith"


def test_snapshot_is_not_affected_by_removals():
    document = XMLParser().parse_bytes(idoc(
        standard_person("00000001"), standard_person("00000002"), standard_person("00000003")
    ))
    persons = document.iter_nodes_by_tag("E1PLOGI")

    for record in persons:
        record.detach()

    assert len(persons) == 3
    assert all(record.parent is None for record in persons)
    assert document.iter_nodes_by_tag("E1PLOGI") == []
    assert persons[0].detach() is False


def test_remove_descendants_and_find_ancestor():
    document = XMLParser().parse_bytes(idoc(standard_person()))
    time_slice = document.iter_nodes_by_tag("E1P0002")[0]

    removed = time_slice.remove_descendants("FNAMR_45")

    assert [node.tag for node in removed] == ["FNAMR_45"]
    assert time_slice.remove_descendants("FNAMR_45") == []
    assert time_slice.find_ancestor("E1PLOGI") is document.iter_nodes_by_tag("E1PLOGI")[0]
    assert time_slice.find_ancestor("NOPE") is None


def test_normalize_relinks_and_renumbers():
    document = XMLParser().parse_bytes(idoc(standard_person()))
    segment = document.iter_nodes_by_tag("E1PITYP")[0]
    first_child = segment.children[0]
    segment.remove_child(first_child)
    segment.children[0].text_content = ""

    document.normalize()

    assert [c.sibling_order for c in segment.children] == list(range(len(segment.children)))
    assert segment.children[0].text_content is None
    assert all(c.depth == segment.depth + 1 for c in segment.children)


def test_writer_round_trip_keeps_namespace_and_text():
    parser = XMLParser()
    document = parser.parse_bytes(PRETTY_IDOC)

    output = XMLWriter().to_bytes(document)
    reparsed = parser.parse_bytes(output)

    assert output.startswith(b"<?xml")
    assert reparsed.root.namespace == "urn:sap-com:document:sap:idoc:messages"
    assert reparsed.root.get_text("NACHN") == "  Smith  "


def test_writer_reports_unknown_encoding():
    document = XMLParser().parse_bytes(PRETTY_IDOC)

    with pytest.raises(XMLSerializationError):
        XMLWriter().to_bytes(document, encoding="no-such-codec")


@pytest.mark.parametrize("payload", [b"", b"   ", b"<HRMD_A09><IDOC></HRMD_A09>", b"not xml"])
def test_loader_rejects_malformed_payload(payload):
    with pytest.raises(XMLValidationError):
        XMLLoader.load_from_bytes(payload, "broken")


CYRILLIC_PAYLOAD = "<HRMD_A09><NACHN>Иванов Иван Иванович</NACHN></HRMD_A09>".encode("cp1251")


def test_loader_uses_confident_detection(monkeypatch):
    monkeypatch.setattr(encoding_module.chardet, "detect",
                        lambda data: {"encoding": "windows-1251", "confidence": 0.99})

    root = XMLLoader.load_from_bytes(CYRILLIC_PAYLOAD)

    assert root.find("NACHN").text == "Иванов Иван Иванович"


def test_loader_falls_back_to_priority_list(monkeypatch):
    monkeypatch.setattr(encoding_module.chardet, "detect",
                        lambda data: {"encoding": None, "confidence": 0.0})

    assert EncodingResolver.detect_encoding(CYRILLIC_PAYLOAD) == "cp1251"
    assert XMLLoader.load_from_bytes(CYRILLIC_PAYLOAD).find("NACHN").text == "Иванов Иван Иванович"


def test_declared_encoding_is_respected():
    payload = ('<?xml version="1.0" encoding="windows-1251"?>'
               '<HRMD_A09><NACHN>Петров</NACHN></HRMD_A09>').encode("cp1251")

    assert EncodingResolver.declared_encoding(payload) == "windows-1251"
    assert XMLLoader.load_from_bytes(payload).find("NACHN").text == "Петров"
    assert EncodingResolver.declared_encoding(b"<HRMD_A09/>") is None


def test_load_from_gzip_file(tmp_path):
    path = tmp_path / "hrmd.xml.gz"
    with gzip.open(path, "wb") as f:
        f.write(idoc(standard_person()))

    root = XMLLoader.load_from_file(path)

    assert root.tag == "HRMD_A09"


def test_load_from_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        XMLLoader.load_from_file(tmp_path / "missing.xml")


def test_writer_text_output_has_no_declared_encoding():
    payload = ('<?xml version="1.0" encoding="windows-1251"?>'
               '<HRMD_A09><NACHN>Петров</NACHN></HRMD_A09>').encode("cp1251")
    document = XMLParser().parse_bytes(payload)

    text = XMLWriter().to_string(document)

    assert text == '<?xml version="1.0"?>\n<HRMD_A09><NACHN>Петров</NACHN></HRMD_A09>'


def test_parser_reads_decoded_text_whatever_the_declaration():
    document = XMLParser().parse_string(
        '<?xml version="1.0" encoding="windows-1251"?><HRMD_A09><NACHN>Петров</NACHN></HRMD_A09>'
    )

    assert document.root.get_text("NACHN") == "Петров"
    assert document.encoding is None


@pytest.mark.parametrize("text", ["", "  ", "<HRMD_A09>"])
def test_parser_rejects_malformed_text(text):
    with pytest.raises(XMLValidationError):
        XMLParser().parse_string(text)
