from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import utils
from models.dependency_tree import (
    DependencyTreeNode,
    ProjectNode,
    collect_package_ids,
    parse_dependency_tree_node,
)
from models.identifier import Identifier

_SPDX_OPERATORS = {"AND", "OR"}
_SPDX_TOKEN_RE = re.compile(r"\(|\)|[^\s()]+")


@dataclass
class RemoteArtifact:
    url: str = ""
    hash_value: str = ""
    hash_algorithm: str = ""


@dataclass
class CopyrightFinding:
    path: str
    statement: str


@dataclass
class LicenseFile:
    path: str
    text: str
    licenses: List[str] = field(default_factory=list)


@dataclass
class PackageInfo:
    """A package (or a project) of the analyzed result with its resolved license data."""
    id: Identifier
    declared_license_expression: str = ""
    unmapped_licenses: List[str] = field(default_factory=list)
    license_files: List[LicenseFile] = field(default_factory=list)
    copyrights: List[CopyrightFinding] = field(default_factory=list)
    file_sha1s: Dict[str, str] = field(default_factory=dict)
    source_artifact: RemoteArtifact = field(default_factory=RemoteArtifact)
    binary_artifact: RemoteArtifact = field(default_factory=RemoteArtifact)

    def declared_license_ids(self) -> List[str]:
        return spdx_license_ids(self.declared_license_expression)


def spdx_license_ids(expression: str) -> List[str]:
    """
    Single licenses of an SPDX expression, in order and without duplicates.
    "GPL-2.0-only WITH Classpath-exception-2.0" stays one license.
    """
    tokens = _SPDX_TOKEN_RE.findall(expression or "")
    licenses: List[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in ("(", ")") or token.upper() in _SPDX_OPERATORS:
            i += 1
            continue
        if i + 2 < len(tokens) and tokens[i + 1].upper() == "WITH":
            token = f"{token} WITH {tokens[i + 2]}"
            i += 2
        if token not in licenses:
            licenses.append(token)
        i += 1
    return licenses


@dataclass
class OrtResult:
    projects: Dict[Identifier, PackageInfo] = field(default_factory=dict)
    packages: Dict[Identifier, PackageInfo] = field(default_factory=dict)
    dependency_trees: List[DependencyTreeNode] = field(default_factory=list)
    license_classifications: Dict[str, Set[str]] = field(default_factory=dict)
    has_scan_results: bool = True

    def get_project(self, project_id: Identifier) -> Optional[PackageInfo]:
        return self.projects.get(project_id)

    def get_package(self, package_id: Identifier) -> Optional[PackageInfo]:
        return self.packages.get(package_id)

    def get_projects(self) -> List[PackageInfo]:
        return list(self.projects.values())

    def get_project_packages(self, project_id: Identifier) -> List[PackageInfo]:
        """Packages found below the project's tree nodes; unknown identifiers are skipped."""
        packages: List[PackageInfo] = []
        seen: Set[Identifier] = set()
        for tree in self.dependency_trees:
            if not isinstance(tree, ProjectNode) or tree.id != project_id:
                continue
            for pkg_id in collect_package_ids(tree):
                pkg = self.packages.get(pkg_id)
                if pkg is not None and pkg_id not in seen:
                    seen.add(pkg_id)
                    packages.append(pkg)
        return packages

    def get_license_categories(self, license_id: str) -> Set[str]:
        return set(self.license_classifications.get(license_id, set()))


# ----------------------------
# JSON loading
# ----------------------------

def _artifact_from_dict(data: Optional[Dict[str, Any]]) -> RemoteArtifact:
    if not isinstance(data, dict):
        return RemoteArtifact()
    hash_data = data.get("hash") if isinstance(data.get("hash"), dict) else {}
    return RemoteArtifact(
        url=data.get("url") or "",
        hash_value=hash_data.get("value") or "",
        hash_algorithm=(hash_data.get("algorithm") or "").upper().replace("-", ""),
    )


def package_info_from_dict(data: Dict[str, Any]) -> PackageInfo:
    license_files = [
        LicenseFile(path=f.get("path", ""), text=f.get("text", ""), licenses=list(f.get("licenses") or []))
        for f in data.get("license_files") or []
    ]
    copyrights = [
        CopyrightFinding(path=c.get("path", ""), statement=c.get("statement", ""))
        for c in data.get("copyrights") or []
    ]
    file_sha1s = {f["path"]: f.get("sha1", "") for f in data.get("files") or [] if f.get("path")}
    return PackageInfo(
        id=Identifier.from_coordinates(data["id"]),
        declared_license_expression=data.get("declared_license_expression") or "",
        unmapped_licenses=list(data.get("unmapped_licenses") or []),
        license_files=license_files,
        copyrights=copyrights,
        file_sha1s=file_sha1s,
        source_artifact=_artifact_from_dict(data.get("source_artifact")),
        binary_artifact=_artifact_from_dict(data.get("binary_artifact")),
    )


def ort_result_from_dict(data: Dict[str, Any]) -> OrtResult:
    projects = {p.id: p for p in (package_info_from_dict(d) for d in data.get("projects") or [])}
    packages = {p.id: p for p in (package_info_from_dict(d) for d in data.get("packages") or [])}
    project_ids = set(projects)
    trees = [parse_dependency_tree_node(t, project_ids) for t in data.get("dependency_trees") or []]
    classifications = {
        license_id: set(categories or [])
        for license_id, categories in (data.get("license_classifications") or {}).items()
    }
    return OrtResult(
        projects=projects,
        packages=packages,
        dependency_trees=trees,
        license_classifications=classifications,
        has_scan_results=bool(data.get("has_scan_results", True)),
    )


def load_ort_result(path: Union[str, Path]) -> OrtResult:
    return ort_result_from_dict(utils.read_json_file(path))
