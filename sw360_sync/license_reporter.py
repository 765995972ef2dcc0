from __future__ import annotations

import time
import traceback
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import utils
from configuration import Configuration as Config
from loggers.sw360_sync_logger import sw360_sync_logger as logger
from models.dependency_tree import deduplicate_dependency_trees
from models.ort_result import OrtResult
from sw360_sync.attachment_sync import Sleeper, sync_attachments
from sw360_sync.dependency_tree_sync import create_sw360_dependency_tree
from sw360_sync.name_id_index import Sw360SyncContext
from sw360_sync.source_archive import SourceDownloader


def resolve_options(options: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Defaults overridden by the given run options."""
    resolved = dict(Config.default_report_options)
    resolved.update({k: str(v) for k, v in (options or {}).items()})
    return resolved


def generate_report(
        ort_result: OrtResult,
        output_dir: Path,
        options: Optional[Mapping[str, str]] = None,
        context: Optional[Sw360SyncContext] = None,
        downloader: Optional[SourceDownloader] = None,
        sleeper: Sleeper = time.sleep,
) -> List[Path]:
    """
    Mirror the dependency trees of ort_result into SW360 and attach the report files
    of every package to its release.

    Returns the files written to output_dir. Configuration, reconciliation and
    pagination errors abort the run and are re-raised after being logged; failures
    while handling a single package only skip that package.
    """
    try:
        opts = resolve_options(options)
        license_text_attachment_enable = utils.is_true(opts[Config.option_license_text_attachment_enable])
        logger.info(f"licenseTextAttachment={license_text_attachment_enable}")

        if not ort_result.has_scan_results:
            logger.warning("The specified result file does not contain scan information.")
            return []

        if context is None:
            context = Sw360SyncContext.create()

        dependency_trees = ort_result.dependency_trees
        if utils.is_true(opts[Config.option_deduplicate_dependency_tree]):
            dependency_trees = deduplicate_dependency_trees(dependency_trees)

        sync_result = create_sw360_dependency_tree(
            dependency_trees,
            ort_result,
            context,
            project_name=opts[Config.option_root_project_name],
            project_version=opts[Config.option_root_project_version],
            dependency_network_enable=utils.is_true(opts[Config.option_dependency_network_enable]),
        )
        logger.info(
            f"Dependency tree linked to SW360 project {sync_result.project_id} "
            f"({len(sync_result.linked_release_ids)} top-level releases)"
        )

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_files: List[Path] = []
        for project in ort_result.get_projects():
            packages = ort_result.get_project_packages(project.id)
            logger.info(f"Uploading report files for {len(packages)} packages of project {project.id}")
            output_files += sync_attachments(
                packages,
                ort_result,
                output_dir,
                context,
                downloader=downloader,
                license_text_attachment_enable=license_text_attachment_enable,
                sleeper=sleeper,
            )
        return output_files

    except Exception as e:
        logger.error(f"Failed to create the SW360 license report: {e}\n{traceback.format_exc()}")
        raise
