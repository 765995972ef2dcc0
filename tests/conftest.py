"""Shared fixtures: a sample analysis result and an in-memory SW360 catalog."""
import copy
from pathlib import Path

import pytest

from models.ort_result import OrtResult, ort_result_from_dict
from sw360_sync.name_id_index import Sw360NameIdIndex, Sw360SyncContext
from sw360_fakes import FakeCatalog, FakeComponentClient, FakeProjectClient, FakeReleaseClient

APP = "Maven:com.example:app:1.0"
COMMONS = "Maven:org.apache.commons:commons-lang3:3.12.0"
GUAVA = "Maven:com.google.guava:guava:31.1-jre"
GPL_LIB = "Maven:org.example:gpl-lib:2.0"
LEFT_PAD = "NPM::left-pad:1.3.0"

APACHE_TEXT = "Apache License\nVersion 2.0, January 2004"
GPL_TEXT = "GNU GENERAL PUBLIC LICENSE\nVersion 2, June 1991"

ORT_RESULT_DATA = {
    "has_scan_results": True,
    "projects": [
        {"id": APP, "declared_license_expression": "Apache-2.0"},
    ],
    "packages": [
        {
            "id": COMMONS,
            "declared_license_expression": "Apache-2.0",
            "license_files": [{"path": "LICENSE.txt", "text": APACHE_TEXT, "licenses": ["Apache-2.0"]}],
            "copyrights": [
                {"path": "src/main/java/StringUtils.java", "statement": "Copyright 2001-2021 The Apache Software Foundation"},
                {"path": "NOTICE.txt", "statement": "Copyright 2001-2021 The Apache Software Foundation"},
            ],
            "files": [
                {"path": "LICENSE.txt", "sha1": "1111111111111111111111111111111111111111"},
                {"path": "NOTICE.txt", "sha1": "2222222222222222222222222222222222222222"},
            ],
            "source_artifact": {
                "url": "https://repo.example.com/commons-lang3-3.12.0-sources.jar",
                "hash": {"value": "3333333333333333333333333333333333333333", "algorithm": "SHA-1"},
            },
        },
        {
            "id": GUAVA,
            "declared_license_expression": "Apache-2.0",
            "license_files": [{"path": "LICENSE", "text": APACHE_TEXT, "licenses": ["Apache-2.0"]}],
        },
        {
            "id": GPL_LIB,
            "declared_license_expression": "GPL-2.0-only",
            "unmapped_licenses": ["GPL v2 or something"],
            "license_files": [
                {"path": "COPYING", "text": GPL_TEXT, "licenses": ["GPL-2.0-only"]},
                {"path": "LICENSE-APACHE", "text": APACHE_TEXT, "licenses": ["Apache-2.0"]},
            ],
        },
        {
            "id": LEFT_PAD,
            "declared_license_expression": "WTFPL",
        },
    ],
    "dependency_trees": [
        {
            "pkg": APP,
            "isProject": True,
            "children": [
                {
                    "scope": "compile",
                    "children": [
                        {"pkg": COMMONS, "children": [{"pkg": GUAVA}]},
                        {"pkg": GPL_LIB},
                    ],
                },
                {"scope": "test", "children": [{"pkg": LEFT_PAD}]},
            ],
        }
    ],
    "license_classifications": {
        "Apache-2.0": ["permissive"],
        "GPL-2.0-only": ["copyleft", "include-in-notice-file"],
    },
}


@pytest.fixture
def ort_result_data() -> dict:
    return copy.deepcopy(ORT_RESULT_DATA)


@pytest.fixture
def ort_result(ort_result_data) -> OrtResult:
    return ort_result_from_dict(ort_result_data)


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def sync_context(fake_catalog) -> Sw360SyncContext:
    return Sw360SyncContext(
        project_client=FakeProjectClient(fake_catalog),
        component_client=FakeComponentClient(fake_catalog),
        release_client=FakeReleaseClient(fake_catalog),
        index=Sw360NameIdIndex(),
        username="tester",
    )


@pytest.fixture
def fake_downloader():
    """Writes one source file per package instead of downloading."""
    def download(pkg, target_dir: Path) -> None:
        Path(target_dir, "Main.java").write_text(f"// sources of {pkg.id}\n", encoding="utf-8")
    return download


@pytest.fixture
def no_sleep():
    slept = []
    return slept.append
