"""
Component license information (CLIXML) documents for SW360 releases.

The document lists the package's license files grouped by license id and its
copyright statements, in the ComponentLicenseInformation format SW360 reads from
COMPONENT_LICENSE_INFO_XML attachments.
"""
from __future__ import annotations

import uuid
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from configuration import Configuration as Config
from loggers.sw360_sync_logger import sw360_sync_logger as logger
from models.ort_result import PackageInfo, RemoteArtifact

CLIXML_FILE_EXTENSION = "xml"
CLIXML_FORMAT_VERSION = "1.6"


@dataclass(frozen=True)
class LicenseFileInfo:
    path: str
    hash: str
    licenses: tuple
    text: str
    acknowledgement: str = ""


@dataclass(frozen=True)
class CopyrightFileInfo:
    path: str
    hash: str
    text: str


def get_clixml_file_name(pkg: PackageInfo) -> str:
    return pkg.id.to_file_name(Config.clixml_file_name_prefix, CLIXML_FILE_EXTENSION)


def get_component_hash(pkg: PackageInfo, algorithm: Optional[str] = None) -> str:
    """
    Hash of the first artifact (source, then binary) that has a url.
    With algorithm=None any hash qualifies, otherwise only one of that algorithm.
    """
    artifacts: List[RemoteArtifact] = [pkg.source_artifact, pkg.binary_artifact]
    for artifact in artifacts:
        if not artifact.url.strip():
            continue
        if algorithm is None:
            return artifact.hash_value
        if artifact.hash_algorithm == algorithm.upper():
            return artifact.hash_value
    return ""


def get_license_file_info_list(pkg: PackageInfo) -> List[LicenseFileInfo]:
    return [
        LicenseFileInfo(
            path=f.path,
            hash=pkg.file_sha1s.get(f.path, ""),
            licenses=tuple(f.licenses),
            text=f.text,
        )
        for f in pkg.license_files
    ]


def get_copyright_file_info_list(pkg: PackageInfo) -> List[CopyrightFileInfo]:
    # one entry per path (the last finding wins), sorted by path
    by_path: Dict[str, CopyrightFileInfo] = {}
    for finding in pkg.copyrights:
        by_path[finding.path] = CopyrightFileInfo(
            path=finding.path,
            hash=pkg.file_sha1s.get(finding.path, ""),
            text=finding.statement,
        )
    return [by_path[p] for p in sorted(by_path)]


def get_licenses_main_list(license_file_infos: List[LicenseFileInfo]) -> Dict[str, List[LicenseFileInfo]]:
    """license id -> license files mentioning it, in first-seen order."""
    grouped: Dict[str, List[LicenseFileInfo]] = {}
    for info in license_file_infos:
        for license_id in info.licenses:
            if license_id:
                grouped.setdefault(license_id, []).append(info)
    return grouped


def _sub(parent: ET.Element, tag: str, text: str = "") -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = text
    return el


def build_clixml_document(pkg: PackageInfo) -> Optional[ET.ElementTree]:
    """Returns None when the package has no license files to report."""
    license_file_infos = get_license_file_info_list(pkg)
    if not license_file_infos:
        logger.warning(f"Failed to retrieve the license file info list for this package. ({pkg.id.name} {pkg.id.version})")
        return None

    root = ET.Element("ComponentLicenseInformation", {
        "component": pkg.id.name,
        "creator": "",
        "date": "",
        "baseDoc": "",
        "toolUsed": "",
        "componentID": "",
        "includesAcknowledgements": "false",
        "componentSHA1": get_component_hash(pkg, "SHA1"),
        "Version": CLIXML_FORMAT_VERSION,
    })

    general = _sub(root, "GeneralInformation")
    _sub(general, "ReportId", str(uuid.uuid4()))
    _sub(general, "ReviewedBy")
    _sub(general, "ComponentName", pkg.id.name)
    _sub(general, "Community")
    _sub(general, "ComponentVersion", pkg.id.version)
    _sub(general, "ComponentHash", get_component_hash(pkg))
    _sub(general, "ComponentReleaseDate")
    _sub(general, "LinkComponentManagement")
    _sub(general, "LinkScanTool")
    component_id = _sub(general, "ComponentId")
    _sub(component_id, "Type")
    _sub(component_id, "Id")

    assessment = _sub(root, "AssessmentSummary")
    _sub(assessment, "GeneralAssessment", "NA")
    _sub(assessment, "CriticalFilesFound", "None")
    _sub(assessment, "DependencyNotes", "None")
    _sub(assessment, "ExportRestrictionsFound", "None")
    _sub(assessment, "UsageRestrictionsFound", "None")
    _sub(assessment, "AdditionalNotes", "NA")

    for license_id, infos in get_licenses_main_list(license_file_infos).items():
        for info in infos:
            lic = ET.SubElement(root, "License", {"type": "global", "name": license_id, "spdxidentifier": license_id})
            _sub(lic, "Content", info.text)
            _sub(lic, "Files", info.path)
            _sub(lic, "FileHash", info.hash)
            if info.acknowledgement:
                _sub(lic, "Acknowledgements", info.acknowledgement)

    for info in get_copyright_file_info_list(pkg):
        cr = _sub(root, "Copyright")
        _sub(cr, "Content", info.text)
        _sub(cr, "Files", info.path)
        _sub(cr, "FileHash", info.hash)
        _sub(cr, "Comments")

    tree = ET.ElementTree(root)
    ET.indent(tree, space="  ")
    return tree


def write_clixml_file(pkg: PackageInfo, output_dir: Path) -> Optional[Path]:
    """Write ort-cli_<id>.xml into output_dir; None (and no file) when there is no license data."""
    output_file = Path(output_dir, get_clixml_file_name(pkg))
    logger.info(f"Generating file '{output_file}'")

    tree = build_clixml_document(pkg)
    if tree is None:
        logger.warning(f"Failed to retrieve the CLIXML data model for this package. ({pkg.id.name} {pkg.id.version})")
        return None

    output_file.parent.mkdir(parents=True, exist_ok=True)
    tree.write(output_file, encoding="UTF-8", xml_declaration=True)
    return output_file
