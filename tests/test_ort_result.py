import json

import pytest

from conftest import APP, COMMONS, GPL_LIB, GUAVA, LEFT_PAD
from models.dependency_tree import (
    PackageNode,
    ProjectNode,
    ScopeNode,
    collect_package_ids,
    deduplicate_dependency_trees,
    parse_dependency_tree_node,
)
from models.identifier import Identifier
from models.ort_result import load_ort_result, spdx_license_ids
from sw360api.exceptions import StructuralInvariantError


def ids(*coordinates):
    return [Identifier.from_coordinates(c) for c in coordinates]


def test_identifier_coordinates():
    pkg_id = Identifier.from_coordinates(LEFT_PAD)
    assert (pkg_id.type, pkg_id.namespace, pkg_id.name, pkg_id.version) == ("NPM", "", "left-pad", "1.3.0")
    assert pkg_id.to_coordinates() == LEFT_PAD
    assert Identifier.from_coordinates("Go::github.com/foo/bar:v1.0.0+incompatible:x").version == "v1.0.0+incompatible:x"


def test_identifier_file_names():
    assert Identifier.from_coordinates(COMMONS).to_file_name("ort-cli_", "xml") == \
        "ort-cli_Maven-org.apache.commons-commons-lang3@3.12.0.xml"
    assert Identifier.from_coordinates(LEFT_PAD).to_file_name("ort-source-archive_", "zip") == \
        "ort-source-archive_NPM-left-pad@1.3.0.zip"
    assert Identifier.from_coordinates("NPM:@scope:pkg:1.0").to_path() == "NPM/@scope/pkg/1.0"
    assert Identifier.from_coordinates(LEFT_PAD).to_path("-") == "NPM-_-left-pad-1.3.0"


@pytest.mark.parametrize("expression, expected", [
    ("Apache-2.0", ["Apache-2.0"]),
    ("MIT OR Apache-2.0", ["MIT", "Apache-2.0"]),
    ("(MIT AND BSD-3-Clause) OR MIT", ["MIT", "BSD-3-Clause"]),
    ("GPL-2.0-only WITH Classpath-exception-2.0 AND MIT", ["GPL-2.0-only WITH Classpath-exception-2.0", "MIT"]),
    ("", []),
])
def test_spdx_license_ids(expression, expected):
    assert spdx_license_ids(expression) == expected


def test_load_ort_result(tmp_path, ort_result_data):
    path = tmp_path / "ort-result.json"
    path.write_text(json.dumps(ort_result_data), encoding="utf-8")

    result = load_ort_result(path)

    assert [p.id for p in result.get_projects()] == ids(APP)
    commons = result.get_package(Identifier.from_coordinates(COMMONS))
    assert commons.declared_license_ids() == ["Apache-2.0"]
    assert commons.file_sha1s["LICENSE.txt"] == "1111111111111111111111111111111111111111"
    assert commons.source_artifact.hash_algorithm == "SHA1"
    assert result.get_license_categories("GPL-2.0-only") == {"copyleft", "include-in-notice-file"}
    assert result.get_license_categories("WTFPL") == set()
    assert isinstance(result.dependency_trees[0], ProjectNode)


def test_project_packages_flatten_scopes(ort_result):
    packages = ort_result.get_project_packages(Identifier.from_coordinates(APP))
    assert [p.id for p in packages] == ids(COMMONS, GUAVA, GPL_LIB, LEFT_PAD)


def test_project_flag_falls_back_to_project_list():
    node = parse_dependency_tree_node({"pkg": APP, "children": [{"pkg": GUAVA}]}, set(ids(APP)))
    assert isinstance(node, ProjectNode)
    assert isinstance(node.children[0], PackageNode)


def test_node_without_package_or_scope_is_rejected():
    with pytest.raises(StructuralInvariantError):
        parse_dependency_tree_node({"children": []})


def test_deduplicate_keeps_children_on_first_occurrence():
    guava = PackageNode(Identifier.from_coordinates(GUAVA))
    commons_a = PackageNode(Identifier.from_coordinates(COMMONS), [guava])
    commons_b = PackageNode(Identifier.from_coordinates(COMMONS), [guava])
    tree = ProjectNode(Identifier.from_coordinates(APP), [ScopeNode("compile", [commons_a]), ScopeNode("test", [commons_b])])

    [deduped] = deduplicate_dependency_trees([tree])

    assert deduped.children[0].children[0].children == [guava]
    assert deduped.children[1].children[0].children == []
    # the input is left untouched
    assert commons_b.children == [guava]


def test_collect_package_ids_walks_nested_projects():
    nested = ProjectNode(Identifier.from_coordinates("Maven:com.example:lib:1.0"), [
        ScopeNode("compile", [PackageNode(Identifier.from_coordinates(LEFT_PAD))]),
    ])
    tree = ProjectNode(Identifier.from_coordinates(APP), [
        ScopeNode("compile", [PackageNode(Identifier.from_coordinates(GUAVA)), nested]),
    ])
    assert collect_package_ids(tree) == ids(GUAVA, LEFT_PAD)
