"""
Upload the per-package report files to the package's SW360 release.

For every package a source archive, a CLIXML document and (optionally) a notice
file are generated into the output directory and attached to the release, replacing
attachments of the same file name. A failure while handling one package is logged
and the next package is processed.
"""
from __future__ import annotations

import random
import time
import traceback
from pathlib import Path
from typing import Callable, Dict, List, Optional

from configuration import Configuration as Config
from loggers.sw360_sync_logger import sw360_sync_logger as logger
from models.enums import Sw360AttachmentType
from models.ort_result import OrtResult, PackageInfo
from models.sw360_data import Sw360Release
from sw360api.exceptions import DelayInterruptedError
from sw360_sync import clixml_gen, notice_file_gen, source_archive
from sw360_sync.dependency_tree_sync import (
    create_sw360_release_for_ort_package,
    find_sw360_release,
    get_release_name,
    get_version_or_default,
)
from sw360_sync.name_id_index import Sw360SyncContext
from sw360_sync.source_archive import SourceDownloader

Sleeper = Callable[[float], None]


def random_sleep(max_seconds: int = Config.sw360_upload_delay_max, sleeper: Sleeper = time.sleep) -> int:
    """Sleep between 1 and max_seconds whole seconds; returns the seconds slept."""
    seconds = random.randint(1, max(1, max_seconds))
    try:
        sleeper(seconds)
    except KeyboardInterrupt as e:
        raise DelayInterruptedError(f"The delay of {seconds}s before the upload was interrupted.") from e
    return seconds


def generate_package_files(
        pkg: PackageInfo,
        ort_result: OrtResult,
        output_dir: Path,
        downloader: SourceDownloader,
        license_text_attachment_enable: bool,
) -> Dict[Sw360AttachmentType, Path]:
    """Write the report files of pkg into output_dir, keyed by the attachment type they are uploaded as."""
    files: Dict[Sw360AttachmentType, Path] = {}

    archive_file = source_archive.create_source_archive(pkg, output_dir, downloader)
    if archive_file.exists():
        files[Sw360AttachmentType.SOURCE] = archive_file

    clixml_file = clixml_gen.write_clixml_file(pkg, output_dir)
    if clixml_file is not None and clixml_file.exists():
        files[Sw360AttachmentType.COMPONENT_LICENSE_INFO_XML] = clixml_file
    else:
        logger.warning(f"Unable to retrieve the CLIXML for package ({pkg.id.name} {pkg.id.version})")

    if license_text_attachment_enable and notice_file_gen.is_include_in_notice_file_package(pkg, ort_result):
        notice_file = notice_file_gen.write_notice_file(pkg, output_dir)
        if notice_file is not None and notice_file.exists():
            files[Sw360AttachmentType.DOCUMENT] = notice_file

    if notice_file_gen.is_copyleft_package(pkg, ort_result):
        logger.info(f"Package {pkg.id} is licensed under a copyleft license.")

    return files


def get_package_release(pkg: PackageInfo, context: Sw360SyncContext) -> Sw360Release:
    release_name = get_release_name(pkg.id)
    release_version = get_version_or_default(pkg.id.version)
    release = find_sw360_release(release_name, release_version, context)
    if release is None:
        logger.warning(
            f"The absence of this record {release_name}({release_version}) indicates an anomaly in the dependency tree."
        )
        release = create_sw360_release_for_ort_package(pkg, context)
    return release


def upload_attachments(
        release: Sw360Release,
        files: Dict[Sw360AttachmentType, Path],
        context: Sw360SyncContext,
) -> None:
    """Attach files to release, deleting a same-named attachment first."""
    if not files:
        return

    release_id = release.get_id()
    attachment_ids = {a.get_filename(): a.get_id() for a in release.get_embedded_attachment_entries()}
    client = context.release_client

    for attachment_type, file in files.items():
        attachment_id = attachment_ids.get(file.name)
        if attachment_id is not None:
            logger.debug(f"Replacing attachment {file.name} ({attachment_id}) of release {release_id}")
            client.delete_attachment(release_id, attachment_id)

        if attachment_type == Sw360AttachmentType.DOCUMENT:
            client.attach_license_text(release_id, file)
        elif attachment_type == Sw360AttachmentType.SOURCE:
            client.attach_source_code(release_id, file)
        elif attachment_type == Sw360AttachmentType.COMPONENT_LICENSE_INFO_XML:
            client.attach_component_license_info_xml(release_id, file)
        else:
            logger.warning(
                f"Unexpected attachment type specified in the release {release_id} AttachmentType={attachment_type.name}"
            )


def sync_package_attachments(
        pkg: PackageInfo,
        ort_result: OrtResult,
        output_dir: Path,
        context: Sw360SyncContext,
        downloader: SourceDownloader = source_archive.default_source_downloader,
        license_text_attachment_enable: bool = True,
        sleeper: Sleeper = time.sleep,
) -> List[Path]:
    """Generate and upload the files of one package. Errors propagate to the caller."""
    # throttle the load on the SW360 server
    random_sleep(Config.sw360_upload_delay_max, sleeper)

    files = generate_package_files(pkg, ort_result, output_dir, downloader, license_text_attachment_enable)
    release = get_package_release(pkg, context)
    upload_attachments(release, files, context)
    return list(files.values())


def sync_attachments(
        packages: List[PackageInfo],
        ort_result: OrtResult,
        output_dir: Path,
        context: Sw360SyncContext,
        downloader: Optional[SourceDownloader] = None,
        license_text_attachment_enable: bool = True,
        sleeper: Sleeper = time.sleep,
) -> List[Path]:
    """
    Run sync_package_attachments for every package and return the files written.

    A package that fails is logged with its traceback and skipped; files it wrote
    before failing are not returned.
    """
    output_files: List[Path] = []
    for pkg in packages:
        try:
            output_files += sync_package_attachments(
                pkg,
                ort_result,
                output_dir,
                context,
                downloader or source_archive.default_source_downloader,
                license_text_attachment_enable,
                sleeper,
            )
        except Exception as e:
            logger.error(
                f"Failed to upload the report files of package {pkg.id}: {e}\n{traceback.format_exc()}"
            )
    return output_files
