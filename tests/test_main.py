import json
import logging

import pytest

import main
from config import ConfigurationManager, get_config
from i2e.utils.exceptions import ConfigurationError
from i2e.utils.logger import enable_trace, get_logger


@pytest.fixture
def page_text_dir(tmp_path, invoice_pages):
    source = tmp_path / "pages"
    source.mkdir()
    (source / "acme.json").write_text(json.dumps(invoice_pages), encoding="utf-8")
    (source / "short.txt").write_text("Invoice No. 77\nTotal 1.234,56\f", encoding="utf-8")
    return source


def test_run_extraction_over_directory(page_text_dir):
    records, failures = main.run_extraction(str(page_text_dir), save_output=False)

    assert failures == []
    assert [r['fileName'] for r in records] == ["acme.pdf"] * 3 + ["short.pdf"]
    assert records[-1]['extractedInvoiceTotal'] == 1234.56


def test_failing_document_does_not_stop_batch(page_text_dir):
    (page_text_dir / "blank.txt").write_text("   \f  ", encoding="utf-8")

    records, failures = main.run_extraction(str(page_text_dir), save_output=False)

    assert len(records) == 4
    assert [f['file'] for f in failures] == ["blank.txt"]


def test_main_writes_output(page_text_dir, tmp_path):
    output = tmp_path / "out" / "records.json"

    exit_code = main.main(["--input", str(page_text_dir), "--output", str(output), "--quiet"])

    assert exit_code == 0
    assert len(json.loads(output.read_text(encoding="utf-8"))) == 4


def test_main_exit_codes(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()

    assert main.main(["--input", str(empty), "--quiet"]) == 1
    assert main.main(["--input", str(tmp_path / "missing"), "--quiet"]) == 1


def test_main_reports_missing_configuration(tmp_path, capsys):
    exit_code = main.main(["--input", str(tmp_path), "--config", str(tmp_path / "none.yaml")])

    assert exit_code == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_custom_configuration(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("extraction:\n  totals:\n    min_amount: 5.0\n", encoding="utf-8")

    ConfigurationManager(str(settings))

    assert get_config("extraction.totals.min_amount") == 5.0
    assert get_config("extraction.totals.amount_window", 50) == 50

    settings.write_text("extraction:\n  totals:\n    min_amount: 2.5\n", encoding="utf-8")
    manager = ConfigurationManager()
    manager.reload()

    assert manager.get_all() == {"extraction": {"totals": {"min_amount": 2.5}}}


def test_invalid_configuration(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigurationManager(str(settings))


def test_loggers_share_the_package_namespace():
    assert get_logger("main").name == "i2e.main"
    assert get_logger("i2e.extraction.totals").name == "i2e.extraction.totals"


def test_enable_trace_toggles_extraction_logger():
    trace_logger = logging.getLogger("i2e.extraction")
    try:
        enable_trace(True)
        assert trace_logger.level == logging.DEBUG
    finally:
        enable_trace(False)
    assert trace_logger.level == logging.NOTSET


def test_documents_and_summaries(page_text_dir):
    documents, _ = main.extract_documents(str(page_text_dir))

    assert [source for source, _ in documents] == ["acme.json", "short.txt"]
    assert [len(records) for _, records in documents] == [3, 1]
    # the gross total of acme.pdf differs from its net line items, short.pdf has none
    assert main.log_summaries(documents) == 2


def test_inputs_sharing_a_stem_stay_separate_documents(tmp_path, invoice_pages):
    (tmp_path / "inv.json").write_text(json.dumps(invoice_pages), encoding="utf-8")
    (tmp_path / "inv.txt").write_text("Invoice No. 77\nTotal 1.234,56\f", encoding="utf-8")

    documents, failures = main.extract_documents(str(tmp_path))

    assert failures == []
    assert [source for source, _ in documents] == ["inv.json", "inv.txt"]
    assert [len(records) for _, records in documents] == [3, 1]
    assert {r['fileName'] for _, records in documents for r in records} == {"inv.pdf"}
    assert main.log_summaries(documents) == 2


def test_main_summary_and_csv_format(page_text_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    exit_code = main.main(["--input", str(page_text_dir), "--format", "csv", "--summary", "-q"])

    assert exit_code == 0
    assert len(list((tmp_path / "outputs").glob("i2e_records_*.csv"))) == 1


def test_new_configuration_path_replaces_loaded_settings(tmp_path):
    assert get_config("extraction.totals.min_amount") == 1.0

    settings = tmp_path / "strict.yaml"
    settings.write_text("extraction:\n  totals:\n    min_amount: 10.0\n", encoding="utf-8")
    ConfigurationManager(str(settings))

    assert get_config("extraction.totals.min_amount") == 10.0


def test_failed_configuration_switch_keeps_loaded_settings(tmp_path):
    manager = ConfigurationManager()
    missing = tmp_path / "missing.yaml"

    for _ in range(2):
        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(missing))

    assert ConfigurationManager() is manager
    assert manager.config_path.name == "settings.yaml"
    assert get_config("extraction.totals.min_amount") == 1.0


def test_failed_reload_keeps_loaded_settings(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("output:\n  format: csv\n", encoding="utf-8")
    manager = ConfigurationManager(str(settings))

    settings.write_text("output: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        manager.reload()

    assert get_config("output.format") == "csv"
