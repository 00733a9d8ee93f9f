from kaitai_struct_designer.models.document import NodeKind, TextRange
from kaitai_struct_designer.models.parsing.yaml_parser import yaml_parser

SOURCE = """\
meta:
  id: demo
  imports:
    - common
seq:
  - id: magic
    type: u4
"""


def test_node_kinds_and_key_value_shape():
    document = yaml_parser.parse(SOURCE, name="demo.ksy")
    top = document.top_level_value
    assert top.kind is NodeKind.MAPPING
    assert [pair.key for pair in top.key_values()] == ["meta", "seq"]

    meta = top.key_values()[0]
    assert meta.kind is NodeKind.KEY_VALUE
    assert meta.children == [meta.value]
    assert meta.key_range.substring(SOURCE) == "meta"
    assert top.get("seq").kind is NodeKind.SEQUENCE


def test_parent_lookup_goes_through_the_document():
    document = yaml_parser.parse(SOURCE, name="demo.ksy")
    magic_type = document.top_level_value.get("seq").children[0].get("type")
    assert magic_type.text == "u4"

    parent = magic_type.parent
    assert parent.kind is NodeKind.KEY_VALUE and parent.key == "type"
    assert [node.kind for node in magic_type.ancestors()] == [
        NodeKind.KEY_VALUE,
        NodeKind.MAPPING,
        NodeKind.SEQUENCE,
        NodeKind.KEY_VALUE,
        NodeKind.MAPPING,
    ]
    assert document.top_level_value.parent is None


def test_scalar_ranges_match_the_source():
    document = yaml_parser.parse(SOURCE, name="demo.ksy")
    common = document.top_level_value.get("meta").get("imports").children[0]
    assert common.text_range.substring(SOURCE) == "common"
    assert common.text_length == 6
    assert document.offset_to_position(common.text_range.start) == (3, 6)
    assert (common.start_line, common.start_column) == (3, 6)


def test_offsets_and_positions_round_trip():
    document = yaml_parser.parse(SOURCE)
    offset = SOURCE.index("magic")
    line, character = document.offset_to_position(offset)
    assert (line, character) == (5, 8)
    assert document.position_to_offset(line, character) == offset
    assert document.position_to_offset(99, 0) == len(SOURCE)
    # Characters past the end of a line clamp to the line end.
    assert document.position_to_offset(0, 99) == SOURCE.index("\n")


def test_node_at_offset_finds_the_deepest_node():
    document = yaml_parser.parse(SOURCE)
    node = document.node_at_offset(SOURCE.index("common") + 2)
    assert node.kind is NodeKind.SCALAR
    assert node.text == "common"


def test_node_at_path_falls_back_to_nearest_ancestor():
    document = yaml_parser.parse(SOURCE)
    assert document.node_at_path(["seq", 0, "type"]).text == "u4"
    assert document.node_at_path(["seq", 0, "missing"]).kind is NodeKind.MAPPING
    assert document.node_at_path([]) is document.top_level_value


def test_invalid_yaml_is_recorded_not_raised():
    document = yaml_parser.parse("meta: [unclosed\n", name="broken.ksy")
    assert document.roots == []
    assert document.parse_error
    assert document.parse_error_line is not None
    assert document.top_level_value is None


def test_multiple_documents_have_no_top_level_value():
    document = yaml_parser.parse("a: 1\n---\nb: 2\n")
    assert len(document.roots) == 2
    assert document.data == [{"a": 1}, {"b": 2}]
    assert document.top_level_value is None


def test_empty_source():
    document = yaml_parser.parse("")
    assert document.roots == []
    assert document.parse_error is None


def test_recursive_alias_terminates():
    document = yaml_parser.parse("a: &x [*x]\n")
    assert document.parse_error is None
    assert len(list(document.walk())) >= 3


def test_text_range_helpers():
    text_range = TextRange.from_length(4, 3)
    assert text_range == TextRange(4, 7)
    assert text_range.shift_left(4) == TextRange(0, 3)
    assert text_range.shift_right(1) == TextRange(5, 8)
    assert text_range.contains(4) and text_range.contains(7)
    assert not text_range.contains(8)
