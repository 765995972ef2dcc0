import json

import pytest

from models.sw360_data import (
    create_sw360_component,
    create_sw360_project,
    create_sw360_project_search,
    create_sw360_release,
    get_id_from_url,
)
from sw360api.exceptions import MissingFieldError, MissingLinkError
from sw360_fakes import SW360_BASE_URL


def release_json(release_id="r1", **fields) -> str:
    node = {
        "name": "commons-lang3",
        "version": "3.12.0",
        "_links": {
            "self": {"href": f"{SW360_BASE_URL}/releases/{release_id}"},
            "sw360:component": {"href": f"{SW360_BASE_URL}/components/c9"},
        },
    }
    node.update(fields)
    return json.dumps(node)


def test_empty_text_gives_empty_entity():
    project = create_sw360_project("")
    assert project.json_node == {}
    assert project.get_json_as_string() == "{}"


def test_get_id_is_last_segment_of_self_link():
    release = create_sw360_release(release_json("12ab34"))
    assert release.get_id() == "12ab34"
    assert release.get_self_url() == f"{SW360_BASE_URL}/releases/12ab34"


def test_get_id_without_self_link_fails():
    with pytest.raises(MissingLinkError):
        create_sw360_component(json.dumps({"name": "foo"})).get_id()


def test_get_id_with_trailing_slash_fails():
    with pytest.raises(MissingLinkError):
        get_id_from_url(f"{SW360_BASE_URL}/releases/")


def test_component_id_comes_from_component_link():
    assert create_sw360_release(release_json()).get_component_id() == "c9"


def test_get_root_value_missing_key_fails(caplog):
    release = create_sw360_release(release_json())
    with pytest.raises(MissingFieldError):
        release.get_root_value("mainLicenseIds")
    assert "key=mainLicenseIds" in caplog.text


def test_get_root_value_converts_scalars():
    project = create_sw360_project(json.dumps({"name": "p", "enableSvm": True, "size": 3}))
    assert project.get_root_value("name") == "p"
    assert project.get_root_value("enableSvm") == "true"
    assert project.get_root_value("size") == "3"


def test_set_root_value_accepts_structured_values():
    release = create_sw360_release()
    release.set_root_value("name", "guava")
    release.set_root_value("mainLicenseIds", ("Apache-2.0",))
    release.set_root_value("releaseIdToRelationship", {"r2": "CONTAINED"})
    assert json.loads(release.get_json_as_string()) == {
        "name": "guava",
        "mainLicenseIds": ["Apache-2.0"],
        "releaseIdToRelationship": {"r2": "CONTAINED"},
    }


def test_set_root_value_rejects_unknown_field():
    with pytest.raises(ValueError):
        create_sw360_component().set_root_value("mainLicenseIds", ["MIT"])


def test_set_root_value_rejects_unsupported_type():
    with pytest.raises(TypeError):
        create_sw360_project().set_root_value("name", object())


def test_embedded_attachments():
    release = create_sw360_release(release_json(_embedded={"sw360:attachments": [
        {
            "filename": "ort-cli_Maven-org.apache.commons-commons-lang3@3.12.0.xml",
            "sha1": "abc",
            "attachmentType": "COMPONENT_LICENSE_INFO_XML",
            "_links": {"self": {"href": f"{SW360_BASE_URL}/attachments/a1"}},
        }
    ]}))
    attachments = release.get_embedded_attachment_entries()
    assert len(attachments) == 1
    assert attachments[0].get_id() == "a1"
    assert attachments[0].get_filename() == "ort-cli_Maven-org.apache.commons-commons-lang3@3.12.0.xml"
    assert attachments[0].get_sha1() == "abc"
    assert attachments[0].get_attachment_type() == "COMPONENT_LICENSE_INFO_XML"


@pytest.mark.parametrize("fields", [{}, {"_embedded": {}}, {"_embedded": {"sw360:releases": []}}])
def test_embedded_attachments_missing_is_empty(fields):
    assert create_sw360_release(release_json(**fields)).get_embedded_attachment_entries() == []


def test_release_relationship_and_licenses():
    release = create_sw360_release(release_json(
        releaseIdToRelationship={"r2": "CONTAINED"}, mainLicenseIds=["Apache-2.0"]
    ))
    assert release.get_release_relationship() == {"r2": "CONTAINED"}
    assert release.get_main_license_ids() == ["Apache-2.0"]


def test_project_linked_release_ids():
    project = create_sw360_project(json.dumps({
        "name": "ORT_LICENSE_REPORT",
        "linkedReleases": [
            {"release": f"{SW360_BASE_URL}/releases/r1"},
            {"release": f"{SW360_BASE_URL}/releases/r2"},
        ],
    }))
    assert project.get_release_relationship() == ["r1", "r2"]


def test_project_search_page_info():
    search = create_sw360_project_search(json.dumps({
        "_embedded": {"sw360:projects": [{"name": "a"}, {"name": "b"}]},
        "page": {"size": 2, "totalElements": 5, "totalPages": 2, "number": 0},
    }))
    assert [p.get_root_value("name") for p in search.get_search_results()] == ["a", "b"]
    assert search.get_page_info() == {"size": 2, "totalElements": 5, "totalPages": 2, "number": 0}


def test_non_object_response_gives_empty_entity():
    assert create_sw360_release(json.dumps([{"resourceId": "r1", "status": 200}])).json_node == {}
