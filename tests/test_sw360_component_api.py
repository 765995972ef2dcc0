import json

import pytest
import responses

from sw360api.exceptions import RemoteOperationError
from sw360api.sw360_component_api import Sw360ComponentApiClient
from sw360_fakes import SW360_BASE_URL, SW360_TOKEN


def component_node(component_id, name):
    return {
        "name": name,
        "componentType": "OSS",
        "_links": {"self": {"href": f"{SW360_BASE_URL}/components/{component_id}"}},
    }


@pytest.fixture
def client():
    return Sw360ComponentApiClient(SW360_BASE_URL, SW360_TOKEN)


@responses.activate
def test_create_and_get_component(client):
    responses.add(
        responses.POST, f"{SW360_BASE_URL}/components",
        match=[responses.matchers.json_params_matcher({"name": "Foo", "componentType": "OSS"})],
        json=component_node("c1", "Foo"), status=201,
    )
    responses.add(responses.GET, f"{SW360_BASE_URL}/components/c1", json=component_node("c1", "Foo"))

    created = client.create_component(json.dumps({"name": "Foo", "componentType": "OSS"}))
    fetched = client.get_component(created.get_id())

    assert fetched.get_root_value("name") == "Foo"
    assert fetched.get_root_value("componentType") == "OSS"


@responses.activate
def test_component_name_id_map_is_lower_cased(client):
    responses.add(responses.GET, f"{SW360_BASE_URL}/components", json={
        "_embedded": {"sw360:components": [component_node("c1", "Foo"), component_node("c2", "commons-lang3")]}
    })
    assert client.get_sw360_component_name_id_map() == {"foo": "c1", "commons-lang3": "c2"}


@responses.activate
def test_create_conflict_raises(client):
    responses.add(responses.POST, f"{SW360_BASE_URL}/components", json={"message": "duplicate"}, status=409)
    with pytest.raises(RemoteOperationError) as excinfo:
        client.create_component(json.dumps({"name": "Foo"}))
    assert excinfo.value.status_code == 409


@responses.activate
def test_update_and_delete_component(client):
    responses.add(
        responses.PATCH, f"{SW360_BASE_URL}/components/c1",
        json=dict(component_node("c1", "Foo"), homepage="https://foo.example.com"),
    )
    responses.add(responses.DELETE, f"{SW360_BASE_URL}/components/c1", body="", status=200)

    updated = client.update_component("c1", json.dumps({"homepage": "https://foo.example.com"}))
    assert updated.get_root_value("homepage") == "https://foo.example.com"
    assert client.delete_component("c1").json_node == {}
