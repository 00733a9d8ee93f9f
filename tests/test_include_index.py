from kaitai_struct_designer.kaitai.include_index import get_include_infos


def test_include_edges_keep_dangling_targets(write_ksy, store, tmp_path):
    write_ksy("common.ksy", "meta:\n  id: common\n")
    path = write_ksy("main.ksy", """
        meta:
          id: main
          imports:
            - common
            - /opt/formats/absent
    """)
    infos = get_include_infos(store.get_document(path))
    assert [info.import_text for info in infos] == ["common", "/opt/formats/absent"]
    assert infos[0].path == str((tmp_path / "common.ksy").resolve())
    assert infos[1].path.endswith("absent.ksy")


def test_imports_anywhere_in_the_document_are_edges(write_ksy, store):
    path = write_ksy("main.ksy", """
        meta:
          id: main
          imports: [first]
        types:
          nested:
            meta:
              imports:
                - second
    """)
    infos = get_include_infos(store.get_document(path))
    assert [info.import_text for info in infos] == ["first", "second"]


def test_include_ranges_point_at_the_entry(write_ksy, store):
    path = write_ksy("main.ksy", "meta:\n  id: main\n  imports:\n    - common\n")
    document = store.get_document(path)
    [info] = get_include_infos(document)
    assert info.text_range.substring(document.source) == "common"


def test_repeated_entries_are_separate_edges(write_ksy, store):
    path = write_ksy("main.ksy", "meta:\n  id: main\n  imports:\n    - common\n    - common\n")
    infos = get_include_infos(store.get_document(path))
    assert len(infos) == 2
    assert infos[0].path == infos[1].path
    assert infos[0].text_range != infos[1].text_range


def test_no_edges_for_other_files(write_ksy, store):
    path = write_ksy("main.yaml", "meta:\n  id: main\n  imports:\n    - common\n")
    assert get_include_infos(store.get_document(path)) == []


def test_no_edges_without_imports(write_ksy, store):
    path = write_ksy("plain.ksy", "meta:\n  id: plain\n")
    assert get_include_infos(store.get_document(path)) == []
