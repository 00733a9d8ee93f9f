import logging

import pytest

from kaitai_struct_designer.config import DEFAULT_MAX_CACHE_SIZE, DesignerConfig
from kaitai_struct_designer.models.document_store import DocumentStore
from kaitai_struct_designer.utils.logging_utils import configure_split_stream_logging


def test_defaults(monkeypatch):
    for name in ["LOG_LEVEL", "PRINT_LEVEL", "CACHE_ENABLED", "MAX_CACHE_SIZE"]:
        monkeypatch.delenv(f"KSY_DESIGNER_{name}", raising=False)
    config = DesignerConfig.from_env()
    assert config == DesignerConfig("INFO", "WARNING", True, 256)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("KSY_DESIGNER_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("KSY_DESIGNER_CACHE_ENABLED", "False")
    monkeypatch.setenv("KSY_DESIGNER_MAX_CACHE_SIZE", "3")
    config = DesignerConfig.from_env()
    assert config.log_level == "DEBUG"
    assert config.cache_enabled is False
    assert config.max_cache_size == 3


def test_cache_evicts_oldest_documents(write_ksy):
    store = DocumentStore(cache_enabled=True, max_cache_size=2)
    paths = [write_ksy(f"f{i}.ksy", f"meta:\n  id: f{i}\n") for i in range(3)]
    first = store.get_document(paths[0])
    assert store.get_document(paths[0]) is first
    store.get_document(paths[1])
    store.get_document(paths[2])
    assert store.get_document(paths[0]) is not first


def test_cache_picks_up_file_changes(write_ksy):
    store = DocumentStore(cache_enabled=True)
    path = write_ksy("f.ksy", "meta:\n  id: f\n")
    before = store.get_document(path)
    path.write_text("meta:\n  id: changed_name\n", encoding="utf-8")
    after = store.get_document(path)
    assert after is not before
    assert after.top_level_value.get("meta").get("id").text == "changed_name"


def test_disabled_cache_reparses(write_ksy):
    store = DocumentStore(cache_enabled=False)
    path = write_ksy("f.ksy", "meta:\n  id: f\n")
    assert store.get_document(path) is not store.get_document(path)


def test_split_stream_logging_routes_by_level(capsys):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_split_stream_logging(level=logging.DEBUG, stderr_level=logging.WARNING)
        logging.getLogger("kaitai_struct_designer.test").info("to stdout")
        logging.getLogger("kaitai_struct_designer.test").warning("to stderr")
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
    captured = capsys.readouterr()
    assert "to stdout" in captured.out and "to stdout" not in captured.err
    assert "to stderr" in captured.err and "to stderr" not in captured.out


@pytest.mark.parametrize("raw", ["lots", "", "12.5", "0", "-3"])
def test_bad_cache_size_falls_back_to_default(monkeypatch, caplog, raw):
    monkeypatch.setenv("KSY_DESIGNER_MAX_CACHE_SIZE", raw)
    with caplog.at_level(logging.WARNING, logger="kaitai_struct_designer.config"):
        config = DesignerConfig.from_env()
    assert config.max_cache_size == DEFAULT_MAX_CACHE_SIZE
    assert "KSY_DESIGNER_MAX_CACHE_SIZE" in caplog.text
