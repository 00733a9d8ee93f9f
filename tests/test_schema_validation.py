import pytest

from helpers import find_scalar

from kaitai_struct_designer.exceptions import SchemaLoadError
from kaitai_struct_designer.kaitai.references import get_references
from kaitai_struct_designer.kaitai.reference_checks import is_known_type, validate_references
from kaitai_struct_designer.models import json_schema_loader
from kaitai_struct_designer.models.json_schema_loader import load_ksy_schema, load_schema
from kaitai_struct_designer.models.parsing.yaml_parser import yaml_parser
from kaitai_struct_designer.schema import validate_document

VALID = """
meta:
  id: png_chunk
  endian: be
  imports:
    - common
seq:
  - id: len
    type: u4
  - id: body
    size: len
    type: chunk_body
enums:
  color_type:
    0: greyscale
    0x2: truecolor
types:
  chunk_body:
    seq:
      - id: data
        size-eos: true
"""


def _parse(text, name="test.ksy"):
    return yaml_parser.parse(text.lstrip("\n"), name=name)


def test_valid_document_has_no_issues():
    assert validate_document(_parse(VALID)) == []


def test_bad_identifier_points_at_the_value():
    source = VALID.replace("id: len", "id: Len")
    document = _parse(source)
    [issue] = validate_document(document)
    assert issue.yaml_path == "/seq/0/id"
    assert "Len" in issue.message
    assert issue.severity == "error"
    assert document.lines[issue.line].strip() == "- id: Len"
    assert issue.text_range.substring(document.source) == "Len"


def test_unknown_attribute_key():
    document = _parse(VALID.replace("size-eos: true", "size-eos: true\n        sizes: 3"))
    issues = validate_document(document)
    assert len(issues) == 1
    assert issues[0].yaml_path == "/types/chunk_body/seq/0"
    assert "sizes" in issues[0].message


def test_missing_meta_is_reported_at_top():
    [issue] = validate_document(_parse("seq:\n  - id: a\n    type: u1\n"))
    assert "meta" in issue.message
    assert issue.yaml_path == ""
    assert (issue.line, issue.column) == (0, 0)


def test_wrong_value_type():
    [issue] = validate_document(_parse("meta:\n  id: x\n  endian: middle\n"))
    assert issue.yaml_path == "/meta/endian"
    assert issue.line == 2


def test_issues_are_ordered_by_path():
    document = _parse("meta:\n  id: X\nseq:\n  - id: Y\n")
    assert [issue.yaml_path for issue in validate_document(document)] == ["/meta/id", "/seq/0/id"]


def test_non_kaitai_files_are_not_validated():
    assert validate_document(_parse("whatever: 1\n", name="config.yaml")) == []


def test_multi_document_files_are_not_validated():
    assert validate_document(_parse("meta:\n  id: A\n---\nbogus: 1\n")) == []


def test_unparseable_files_are_not_validated():
    assert validate_document(_parse("meta: [\n")) == []


def test_schema_is_loaded_once():
    assert load_ksy_schema() is load_ksy_schema()
    assert load_ksy_schema()["required"] == ["meta"]


def test_missing_schema_resource_raises():
    json_schema_loader.clear_cache()
    with pytest.raises(SchemaLoadError):
        load_schema("does-not-exist.json")


def test_reference_warnings(write_ksy, store):
    path = write_ksy("main.ksy", """
        meta:
          id: main
          imports:
            - absent
        seq:
          - id: a
            type: known
          - id: b
            type: unknown_thing
          - id: c
            type: u2be
        types:
          known:
            seq: []
    """)
    document = store.get_document(path)
    issues = validate_references(document, store)
    assert [issue.severity for issue in issues] == ["warning", "warning"]
    assert issues[0].message.startswith("Cannot resolve import 'absent'")
    assert issues[1].message == "Unknown type 'unknown_thing'"
    assert document.lines[issues[1].line].strip() == "type: unknown_thing"


def test_no_reference_warnings_for_other_files(write_ksy, store):
    path = write_ksy("main.yaml", "seq:\n  - id: a\n    type: nothing\n")
    assert validate_references(store.get_document(path), store) == []


def test_kaitai_type_syntax_is_not_reported_as_unknown(write_ksy, store):
    path = write_ksy("archive.ksy", """
        meta:
          id: archive
          imports:
            - shared
        seq:
          - id: entry
            type: central_dir_entry::inner
          - id: sized
            type: central_dir_entry(5)
          - id: nested_sized
            type: central_dir_entry::inner(_io.size, 2)
          - id: imported_path
            type: shared_block::part
          - id: flags
            type: b12le
          - id: bit
            type: b1be
        types:
          central_dir_entry:
            params:
              - id: count
                type: u4
            types:
              inner:
                seq: []
    """)
    write_ksy("shared.ksy", """
        meta:
          id: shared
        types:
          shared_block:
            types:
              part:
                seq: []
    """)
    document = store.get_document(path)
    assert validate_document(document) == []
    assert validate_references(document, store) == []


def test_broken_type_paths_are_still_reported(write_ksy, store):
    path = write_ksy("archive.ksy", """
        meta:
          id: archive
        seq:
          - id: a
            type: central_dir_entry::missing
          - id: b
            type: nowhere::inner
          - id: c
            type: missing_type(5)
          - id: d
            type: b12xe
        types:
          central_dir_entry:
            types:
              inner:
                seq: []
    """)
    issues = validate_references(store.get_document(path), store)
    assert [issue.message for issue in issues] == [
        "Unknown type 'central_dir_entry::missing'",
        "Unknown type 'nowhere::inner'",
        "Unknown type 'missing_type(5)'",
        "Unknown type 'b12xe'",
    ]


def test_exact_resolution_stays_strict(write_ksy, store):
    path = write_ksy("archive.ksy", """
        meta:
          id: archive
        seq:
          - id: a
            type: entry(5)
        types:
          entry:
            seq: []
    """)
    document = store.get_document(path)
    [reference] = get_references(find_scalar(document, "entry(5)", key="type"), store)
    assert reference.resolve() is None
    assert is_known_type("entry(5)", reference.types)


def test_is_known_type_forms():
    assert is_known_type("b12le", [])
    assert is_known_type(" b1be ", [])
    assert is_known_type("str", [])
    assert is_known_type("b12", [])
    assert not is_known_type("bxle", [])
    assert not is_known_type("outer::inner", [])
