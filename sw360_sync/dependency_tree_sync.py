"""
Mirror the dependency trees of an analysis result into SW360.

Every project and package node becomes a SW360 release (found by name/version or
created), scope nodes are dropped and their children hang directly below the scope's
parent, and each release is linked to its direct children with a CONTAINED
relationship. All top-level releases are linked to one aggregating SW360 project.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from configuration import Configuration as Config
from loggers.sw360_sync_logger import sw360_sync_logger as logger
from models.dependency_tree import DependencyTreeNode, PackageNode, ProjectNode, ScopeNode
from models.enums import Sw360MainlineState, Sw360ReleaseRelationship, Sw360Visibility
from models.identifier import Identifier
from models.ort_result import OrtResult, PackageInfo
from models import sw360_data
from models.sw360_data import Sw360Component, Sw360Project, Sw360Release
from sw360api.exceptions import StructuralInvariantError
from sw360_sync.name_id_index import Sw360SyncContext

UNKNOWN_VERSION = "unknown"
ORT_PROJECT_RELEASE_PREFIX = "ort-project"
DEPENDENCY_NETWORK_DATE_FORMAT = "%Y-%m-%d"


@dataclass
class DependencyTreeSyncResult:
    project_id: str
    linked_release_ids: List[str] = field(default_factory=list)
    dependency_network: List[Dict[str, Any]] = field(default_factory=list)


# ----------------------------
# Naming
# ----------------------------

def get_release_name(pkg_id: Identifier) -> str:
    namespace = (pkg_id.namespace or "").strip()
    return f"{pkg_id.namespace}/{pkg_id.name}" if namespace else pkg_id.name


def get_release_name_for_ort_project(project_id: Identifier) -> str:
    return f"{ORT_PROJECT_RELEASE_PREFIX}/{project_id.type}/{get_release_name(project_id)}"


def get_version_or_default(version: str) -> str:
    # SW360 does not accept a release without a version.
    return version if version else UNKNOWN_VERSION


# ----------------------------
# Create / find
# ----------------------------

def create_sw360_project(
        name: str,
        version: str,
        visibility: Sw360Visibility,
        context: Sw360SyncContext,
) -> Sw360Project:
    entry = sw360_data.create_sw360_project()
    entry.set_root_value("name", name)
    if version:
        entry.set_root_value("version", version)
    entry.set_root_value("visibility", visibility.value)

    new_project = context.project_client.create_project(entry.get_json_as_string())
    logger.debug(f"Project '{name}-{version}' for the report is created in SW360.")

    context.index.put_project_id(name, version, new_project.get_id())
    return new_project


def create_sw360_component(name: str, component_type: str, context: Sw360SyncContext) -> Sw360Component:
    entry = sw360_data.create_sw360_component()
    entry.set_root_value("name", name)
    entry.set_root_value("componentType", component_type)

    new_component = context.component_client.create_component(entry.get_json_as_string())
    logger.debug(f"Component '{name}' is created in SW360.")

    context.index.put_component_id(name, new_component.get_id())
    return new_component


def create_sw360_release(
        name: str,
        version: str,
        main_license_ids: List[str],
        context: Sw360SyncContext,
) -> Sw360Release:
    """Create a release, creating its OSS component first if no component has that name."""
    component_id = context.index.find_component_id(name)
    if component_id is None:
        component_id = create_sw360_component(name, "OSS", context).get_id()

    entry = sw360_data.create_sw360_release()
    entry.set_root_value("name", name)
    entry.set_root_value("version", version)
    entry.set_root_value("componentId", component_id)
    if main_license_ids:
        entry.set_root_value("mainLicenseIds", list(main_license_ids))

    new_release = context.release_client.create_release(entry.get_json_as_string())
    logger.debug(f"Release '{name}-{version}' created in SW360.")

    context.index.put_release_id(name, version, new_release.get_id())
    return new_release


def create_sw360_release_for_ort_package(pkg: PackageInfo, context: Sw360SyncContext) -> Sw360Release:
    if pkg.unmapped_licenses:
        logger.warning(
            f"The following licenses could not be mapped in order to create a SW360 release: {pkg.unmapped_licenses}"
        )
    return create_sw360_release(
        get_release_name(pkg.id),
        get_version_or_default(pkg.id.version),
        pkg.declared_license_ids(),
        context,
    )


def create_sw360_release_for_ort_project(project: PackageInfo, context: Sw360SyncContext) -> Sw360Release:
    return create_sw360_release(
        get_release_name_for_ort_project(project.id),
        get_version_or_default(project.id.version),
        [],
        context,
    )


def find_sw360_release(name: str, version: str, context: Sw360SyncContext) -> Optional[Sw360Release]:
    release_id = context.index.find_release_id(name, version)
    if release_id is None:
        return None
    return context.release_client.get_release(release_id)


def find_or_create_release_for_package(pkg: PackageInfo, context: Sw360SyncContext) -> Sw360Release:
    release = find_sw360_release(get_release_name(pkg.id), get_version_or_default(pkg.id.version), context)
    return release if release is not None else create_sw360_release_for_ort_package(pkg, context)


def find_or_create_release_for_project(project: PackageInfo, context: Sw360SyncContext) -> Sw360Release:
    release = find_sw360_release(
        get_release_name_for_ort_project(project.id), get_version_or_default(project.id.version), context
    )
    return release if release is not None else create_sw360_release_for_ort_project(project, context)


# ----------------------------
# Tree traversal
# ----------------------------

def _resolve_node_release(node: DependencyTreeNode, ort_result: OrtResult, context: Sw360SyncContext) -> Sw360Release:
    if isinstance(node, ProjectNode):
        project = ort_result.get_project(node.id)
        if project is None:
            raise StructuralInvariantError(f"Project {node.id} of the dependency tree is not part of the result.")
        # SW360 has no nested projects, so analyzed projects are registered as releases.
        return find_or_create_release_for_project(project, context)

    if isinstance(node, PackageNode):
        pkg = ort_result.get_package(node.id)
        if pkg is None:
            raise StructuralInvariantError(f"Package {node.id} of the dependency tree has no metadata in the result.")
        return find_or_create_release_for_package(pkg, context)

    raise StructuralInvariantError(
        f"Unexpected node type {type(node).__name__}. It is expected to be a project or a package."
    )


def _release_children(node: DependencyTreeNode) -> List[DependencyTreeNode]:
    """Direct project/package children of node, with scope layers replaced by their children."""
    children: List[DependencyTreeNode] = []
    for child in node.children:
        if isinstance(child, (ProjectNode, PackageNode)):
            children.append(child)
        elif isinstance(child, ScopeNode):
            for scope_child in child.children:
                if not isinstance(scope_child, (ProjectNode, PackageNode)):
                    raise StructuralInvariantError(
                        f"Unexpected node type {type(scope_child).__name__} in scope '{child.name}'. "
                        "Children of a scope are expected to be packages."
                    )
                children.append(scope_child)
        else:
            raise StructuralInvariantError(
                f"Unexpected node type {type(child).__name__}. Children of a package are expected to be packages."
            )
    return children


def create_sw360_release_for_dependency_tree(
        node: DependencyTreeNode,
        parent_dependency_release_links: List[Dict[str, Any]],
        ort_result: OrtResult,
        context: Sw360SyncContext,
) -> Sw360Release:
    """
    Find or create the release of node and of all its descendants, link the release
    to its direct child releases, and append the node's dependency network entry to
    parent_dependency_release_links.
    """
    release = _resolve_node_release(node, ort_result, context)
    release_id = release.get_id()

    linked_releases: List[Sw360Release] = []
    dependency_release_links: List[Dict[str, Any]] = []
    for child in _release_children(node):
        linked_releases.append(
            create_sw360_release_for_dependency_tree(child, dependency_release_links, ort_result, context)
        )

    if linked_releases:
        relationship = {r.get_id(): Sw360ReleaseRelationship.CONTAINED.value for r in linked_releases}
        context.release_client.create_release_relationship(release_id, relationship)

    parent_dependency_release_links.append({
        "releaseId": release_id,
        "releaseRelationship": Sw360ReleaseRelationship.CONTAINED.value,
        "mainlineState": Sw360MainlineState.MAINLINE.value,
        "createOn": date.today().strftime(DEPENDENCY_NETWORK_DATE_FORMAT),
        "createBy": context.username,
        "releaseLink": dependency_release_links,
    })
    return release


def create_sw360_dependency_tree(
        dependency_trees: List[DependencyTreeNode],
        ort_result: OrtResult,
        context: Sw360SyncContext,
        project_name: str = Config.default_report_options[Config.option_root_project_name],
        project_version: str = "",
        dependency_network_enable: bool = False,
) -> DependencyTreeSyncResult:
    """
    Mirror dependency_trees below the SW360 project (project_name, project_version),
    creating that project with visibility EVERYONE if it does not exist yet.

    Every root of dependency_trees must be a project node.
    """
    project_id = context.index.find_project_id(project_name, project_version)
    if project_id is None:
        project_id = create_sw360_project(project_name, project_version, Sw360Visibility.EVERYONE, context).get_id()

    dependency_release_links: List[Dict[str, Any]] = []
    linked_releases: List[Sw360Release] = []
    for tree in dependency_trees:
        if not isinstance(tree, ProjectNode):
            raise StructuralInvariantError(
                f"Unexpected node type {type(tree).__name__}. The root node is expected to represent the project."
            )
        linked_releases.append(
            create_sw360_release_for_dependency_tree(tree, dependency_release_links, ort_result, context)
        )

    release_ids = [r.get_id() for r in linked_releases]
    if release_ids:
        context.project_client.create_release_relationship(project_id, release_ids)

    if dependency_network_enable:
        body_text = json.dumps({"dependencyNetwork": dependency_release_links})
        context.project_client.update_dependency_network(project_id, body_text)

    return DependencyTreeSyncResult(
        project_id=project_id,
        linked_release_ids=release_ids,
        dependency_network=dependency_release_links,
    )
