from helpers import find_scalar

from kaitai_struct_designer.kaitai.references import (
    ImportReference,
    TypeReference,
    find_reference_at,
    get_references,
    iter_references,
)
from kaitai_struct_designer.models.document import TextRange

MAIN = """
meta:
  id: main
  imports:
    - common
    - absent
seq:
  - id: origin
    type: point
  - id: magic
    type: u4
  - id: header
    type: header_block
  - id: broken
    type: bogus
types:
  point:
    seq:
      - id: x
        type: s2le
"""

COMMON = """
meta:
  id: common
types:
  header_block:
    seq:
      - id: size
        type: u2
"""


def _setup(write_ksy, store):
    main = write_ksy("main.ksy", MAIN)
    common = write_ksy("common.ksy", COMMON)
    return store.get_document(main), common


def test_local_type_reference_resolves(write_ksy, store):
    document, _ = _setup(write_ksy, store)
    element = find_scalar(document, "point", key="type")
    [reference] = get_references(element, store)
    assert isinstance(reference, TypeReference)
    definition = reference.resolve()
    assert definition.key == "point"
    assert definition.document is document


def test_imported_type_reference_resolves(write_ksy, store):
    document, common = _setup(write_ksy, store)
    [reference] = get_references(find_scalar(document, "header_block", key="type"), store)
    definition = reference.resolve()
    assert definition.key == "header_block"
    assert definition.document.file_path.name == common.name


def test_standard_types_are_not_references(write_ksy, store):
    document, _ = _setup(write_ksy, store)
    assert get_references(find_scalar(document, "u4", key="type"), store) == []
    assert get_references(find_scalar(document, "s2le", key="type"), store) == []


def test_unknown_type_resolves_to_nothing(write_ksy, store):
    document, _ = _setup(write_ksy, store)
    [reference] = get_references(find_scalar(document, "bogus", key="type"), store)
    assert isinstance(reference, TypeReference)
    assert reference.resolve() is None


def test_type_reference_ranges(write_ksy, store):
    document, _ = _setup(write_ksy, store)
    element = find_scalar(document, "point", key="type")
    [reference] = get_references(element, store)
    assert reference.range.substring(document.source) == "point"
    assert reference.range_in_element == TextRange(0, 5)


def test_import_reference_resolves(write_ksy, store):
    document, common = _setup(write_ksy, store)
    [reference] = get_references(find_scalar(document, "common"), store)
    assert isinstance(reference, ImportReference)
    assert reference.path == str(common.resolve())
    assert reference.resolve().file_path.name == "common.ksy"


def test_dangling_import_reference(write_ksy, store, tmp_path):
    document, _ = _setup(write_ksy, store)
    [reference] = get_references(find_scalar(document, "absent"), store)
    assert reference.resolve() is None
    assert reference.path == str((tmp_path / "absent.ksy").resolve())


def test_import_reference_ranges(write_ksy, store):
    document, _ = _setup(write_ksy, store)
    [reference] = get_references(find_scalar(document, "common"), store)
    assert reference.range.substring(document.source) == "common"
    assert reference.range_in_element == TextRange(0, len("common"))


def test_other_nodes_carry_no_references(write_ksy, store):
    document, _ = _setup(write_ksy, store)
    assert get_references(find_scalar(document, "origin", key="id"), store) == []
    assert get_references(document.top_level_value, store) == []


def test_references_only_in_kaitai_files(write_ksy, store):
    path = write_ksy("main.yaml", MAIN)
    document = store.get_document(path)
    assert get_references(find_scalar(document, "point", key="type"), store) == []
    assert list(iter_references(document, store)) == []


def test_iter_references_in_document_order(write_ksy, store):
    document, _ = _setup(write_ksy, store)
    texts = [reference.element.text for reference in iter_references(document, store)]
    assert texts == ["common", "absent", "point", "header_block", "bogus"]


def test_find_reference_at_offset(write_ksy, store):
    document, _ = _setup(write_ksy, store)
    offset = document.source.index("header_block") + 3
    reference = find_reference_at(document, offset, store)
    assert isinstance(reference, TypeReference)
    assert reference.element.text == "header_block"
    assert find_reference_at(document, document.source.index("magic"), store) is None


def test_resolution_reflects_edits(write_ksy, store):
    document, common = _setup(write_ksy, store)
    element = find_scalar(document, "header_block", key="type")
    assert get_references(element, store)[0].resolve() is not None

    store.set_overlay(common, COMMON.replace("header_block", "renamed_block"))
    assert get_references(element, store)[0].resolve() is None


def test_capitalized_names_match_exactly(write_ksy, store):
    path = write_ksy("a.ksy", """
        meta:
          id: a
        seq:
          - id: p
            type: Point
          - id: q
            type: point
          - id: r
            type: Bogus
        types:
          Point:
            seq: []
    """)
    document = store.get_document(path)
    [point] = get_references(find_scalar(document, "Point", key="type"), store)
    assert point.resolve().key == "Point"
    [lower] = get_references(find_scalar(document, "point", key="type"), store)
    assert lower.resolve() is None
    [bogus] = get_references(find_scalar(document, "Bogus", key="type"), store)
    assert bogus.resolve() is None
