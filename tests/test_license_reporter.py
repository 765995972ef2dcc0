import json

import pytest

import main
from configuration import Configuration as Config
from models.ort_result import ort_result_from_dict
from sw360api.exceptions import ConfigurationError, StructuralInvariantError
from sw360_sync import license_reporter


def test_resolve_options_overrides_defaults():
    options = license_reporter.resolve_options({"projectName": "Product", "dependencyNetwork": "TRUE"})
    assert options == {
        "deduplicateDependencyTree": "false",
        "dependencyNetwork": "TRUE",
        "projectName": "Product",
        "projectVersion": "",
        "licenseTextAttachment": "true",
    }


def test_generate_report(sync_context, fake_catalog, ort_result, tmp_path, fake_downloader, no_sleep):
    files = license_reporter.generate_report(
        ort_result, tmp_path,
        {"projectName": "Product", "projectVersion": "1.0", "dependencyNetwork": "True"},
        context=sync_context, downloader=fake_downloader, sleeper=no_sleep,
    )

    assert fake_catalog.calls_of("create_project") == [
        {"name": "Product", "version": "1.0", "visibility": "EVERYONE"}
    ]
    assert len(fake_catalog.calls_of("update_dependency_network")) == 1
    names = sorted(f.name for f in files)
    assert len([n for n in names if n.startswith("ort-source-archive_")]) == 4
    assert len([n for n in names if n.startswith("ort-cli_")]) == 3
    assert names.count("ort-license-text_Maven-org.example-gpl-lib@2.0.txt") == 1
    assert all(f.exists() for f in files)


def test_generate_report_without_scan_results(sync_context, fake_catalog, ort_result, tmp_path, caplog):
    ort_result.has_scan_results = False
    assert license_reporter.generate_report(ort_result, tmp_path, context=sync_context) == []
    assert fake_catalog.calls == []
    assert "does not contain scan information" in caplog.text


def test_generate_report_without_configuration(ort_result, tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(Config, "sw360_rest_url", "")
    monkeypatch.setattr(Config, "sw360_token", "")
    with pytest.raises(ConfigurationError):
        license_reporter.generate_report(ort_result, tmp_path)
    assert "Failed to create the SW360 license report" in caplog.text


def test_broken_tree_aborts_the_run(sync_context, fake_catalog, ort_result_data, tmp_path, no_sleep):
    ort_result_data["dependency_trees"][0]["children"][0]["children"].append({"pkg": "Maven:org.example:ghost:0.1"})
    ort_result = ort_result_from_dict(ort_result_data)

    with pytest.raises(StructuralInvariantError):
        license_reporter.generate_report(ort_result, tmp_path, context=sync_context, sleeper=no_sleep)
    assert fake_catalog.calls_of("attach") == []


def test_main_exit_status(tmp_path, ort_result_data, monkeypatch):
    input_file = tmp_path / "ort-result.json"
    input_file.write_text(json.dumps(ort_result_data), encoding="utf-8")
    seen = {}

    def fake_generate_report(ort_result, output_dir, options):
        seen["options"] = options
        seen["output_dir"] = output_dir
        return []

    monkeypatch.setattr(license_reporter, "generate_report", fake_generate_report)
    assert main.main([str(input_file), "--output-dir", str(tmp_path / "out"), "-O", "projectName=Product"]) == 0
    assert seen["options"] == {"projectName": "Product"}
    assert seen["output_dir"] == tmp_path / "out"

    def failing_generate_report(ort_result, output_dir, options):
        raise ConfigurationError("SW360 authentication token string is missing.")

    monkeypatch.setattr(license_reporter, "generate_report", failing_generate_report)
    assert main.main([str(input_file)]) == 1


def test_main_rejects_malformed_option(tmp_path):
    with pytest.raises(SystemExit):
        main.main([str(tmp_path / "ort-result.json"), "-O", "projectName"])
