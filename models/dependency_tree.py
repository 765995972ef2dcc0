from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from models.identifier import Identifier
from sw360api.exceptions import StructuralInvariantError


@dataclass
class ProjectNode:
    id: Identifier
    children: List["DependencyTreeNode"] = field(default_factory=list)


@dataclass
class PackageNode:
    id: Identifier
    children: List["DependencyTreeNode"] = field(default_factory=list)


@dataclass
class ScopeNode:
    name: str
    children: List["DependencyTreeNode"] = field(default_factory=list)


DependencyTreeNode = Union[ProjectNode, PackageNode, ScopeNode]


def is_project_node(node: Any) -> bool:
    return isinstance(node, ProjectNode)


def is_package_node(node: Any) -> bool:
    return isinstance(node, PackageNode)


def is_scope_node(node: Any) -> bool:
    return isinstance(node, ScopeNode)


def parse_dependency_tree_node(data: Dict[str, Any], project_ids: Optional[Set[Identifier]] = None) -> DependencyTreeNode:
    """
    Build a node from its JSON form:
      {"pkg": "Maven:org.example:lib:1.0", "isProject": false, "children": [...]}
      {"scope": "compile", "children": [...]}

    A "pkg" node is a project when "isProject" is true, or when "isProject" is absent
    and the identifier is one of project_ids.
    """
    if not isinstance(data, dict):
        raise StructuralInvariantError(f"Dependency tree node must be an object, got {type(data).__name__}")

    children = [parse_dependency_tree_node(c, project_ids) for c in data.get("children") or []]

    pkg = data.get("pkg")
    if pkg:
        pkg_id = Identifier.from_coordinates(pkg)
        is_project = data.get("isProject")
        if is_project is None:
            is_project = pkg_id in (project_ids or set())
        if is_project:
            return ProjectNode(id=pkg_id, children=children)
        return PackageNode(id=pkg_id, children=children)

    scope = data.get("scope")
    if scope:
        return ScopeNode(name=scope, children=children)

    raise StructuralInvariantError(f"Dependency tree node has neither a package nor a scope: keys={sorted(data)}")


def deduplicate_dependency_trees(trees: Iterable[DependencyTreeNode]) -> List[DependencyTreeNode]:
    """
    Return copies of the trees in which a package or project seen before (depth-first)
    keeps no children. Scope nodes are never deduplicated.
    """
    seen: Set[Identifier] = set()

    def _copy(node: DependencyTreeNode) -> DependencyTreeNode:
        if isinstance(node, ScopeNode):
            return ScopeNode(name=node.name, children=[_copy(c) for c in node.children])
        if node.id in seen:
            return type(node)(id=node.id, children=[])
        seen.add(node.id)
        return type(node)(id=node.id, children=[_copy(c) for c in node.children])

    return [_copy(t) for t in trees]


def collect_package_ids(node: DependencyTreeNode) -> List[Identifier]:
    """
    Unique package identifiers below node, in depth-first order. Scope layers are
    flattened and nested projects are walked through without being listed.
    """
    ids: List[Identifier] = []
    seen: Set[Identifier] = set()

    def _walk(n: DependencyTreeNode) -> None:
        for child in n.children:
            if isinstance(child, PackageNode) and child.id not in seen:
                seen.add(child.id)
                ids.append(child.id)
            _walk(child)

    _walk(node)
    return ids
