from pathlib import Path
from typing import Iterable, Optional, Set

from configuration import Configuration as Config
from loggers.sw360_sync_logger import sw360_sync_logger as logger
from models.ort_result import OrtResult, PackageInfo

LICENSE_TEXT_FILE_EXTENSION = "txt"
LICENSE_TEXT_SEPARATOR = "\n\n" + "=" * 72 + "\n\n"


def get_license_text_file_name(pkg: PackageInfo) -> str:
    return pkg.id.to_file_name(Config.license_text_file_name_prefix, LICENSE_TEXT_FILE_EXTENSION)


def _has_license_category(pkg: PackageInfo, ort_result: OrtResult, categories: Iterable[str]) -> bool:
    wanted: Set[str] = set(categories)
    for license_id in pkg.declared_license_ids():
        if ort_result.get_license_categories(license_id) & wanted:
            return True
    return False


def is_copyleft_package(pkg: PackageInfo, ort_result: OrtResult) -> bool:
    return _has_license_category(pkg, ort_result, Config.copyleft_license_categories)


def is_include_in_notice_file_package(pkg: PackageInfo, ort_result: OrtResult) -> bool:
    return _has_license_category(pkg, ort_result, Config.include_in_notice_file_categories)


def write_notice_file(pkg: PackageInfo, output_dir: Path) -> Optional[Path]:
    """
    Write the texts of the package's license files, separated by a line of 72 "=",
    to ort-license-text_<id>.txt. Returns None if there is no license text.
    """
    text = LICENSE_TEXT_SEPARATOR.join(f.text for f in pkg.license_files)
    if not text:
        logger.warning(f"Unable to retrieve the license text for package {pkg.id.name} {pkg.id.version}")
        return None

    output_file = Path(output_dir, get_license_text_file_name(pkg))
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(text, encoding="utf-8")
    return output_file
