import hashlib
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import unquote, urlparse

import requests

import utils
from configuration import Configuration as Config
from loggers.sw360_sync_logger import sw360_sync_logger as logger
from models.ort_result import PackageInfo
from sw360api.exceptions import SourceDownloadError

SOURCE_ARCHIVE_FILE_EXTENSION = "zip"
DOWNLOAD_CHUNK_SIZE = 1024 * 1024

# (package, target directory) -> None; fills the directory with the package sources
SourceDownloader = Callable[[PackageInfo, Path], None]


def get_source_archive_file_name(pkg: PackageInfo) -> str:
    return pkg.id.to_file_name(Config.source_archive_file_name_prefix, SOURCE_ARCHIVE_FILE_EXTENSION)


def get_package_source_directory(pkg: PackageInfo, output_dir: Path) -> Path:
    return Path(output_dir, pkg.id.to_path("-"))


def _hash_file(path: Path, algo: str) -> str:
    h = hashlib.new(algo.lower().replace("-", ""))
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(DOWNLOAD_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def _download(http: requests.Session, url: str, dest: Path) -> None:
    with http.get(url, stream=True, timeout=Config.sw360_timeout, proxies=Config.proxies) as response:
        response.raise_for_status()
        with open(dest, "wb") as f:
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                if chunk:
                    f.write(chunk)


def default_source_downloader(pkg: PackageInfo, target_dir: Path, session: Optional[requests.Session] = None) -> None:
    """
    Download the package's source artifact into target_dir and check its hash
    when one is declared.

    A given session is left open; otherwise a session is opened for this download
    and closed afterwards.
    """
    url = pkg.source_artifact.url.strip()
    if not url:
        raise SourceDownloadError(f"Package {pkg.id} has no source artifact to download.")

    file_name = unquote(Path(urlparse(url).path).name) or "source"
    dest = Path(target_dir, file_name)
    dest.parent.mkdir(parents=True, exist_ok=True)

    try:
        if session is not None:
            _download(session, url, dest)
        else:
            with requests.Session() as http:
                _download(http, url, dest)
    except requests.RequestException as e:
        raise SourceDownloadError(f"Failed to download the sources of {pkg.id} from {url}: {e}") from e

    expected = pkg.source_artifact.hash_value
    algorithm = pkg.source_artifact.hash_algorithm
    if expected and algorithm:
        try:
            actual = _hash_file(dest, algorithm)
        except ValueError:
            logger.debug(f"Unsupported hash algorithm {algorithm} for {pkg.id}, not verifying the download.")
            return
        if actual.lower() != expected.lower():
            raise SourceDownloadError(
                f"The {algorithm} hash of {dest.name} is {actual}, expected {expected} for {pkg.id}."
            )


def create_source_archive(
        pkg: PackageInfo,
        output_dir: Path,
        downloader: SourceDownloader = default_source_downloader,
) -> Path:
    """
    Download the sources of pkg to <output_dir>/<id path>/src and pack them as
    ort-source-archive_<id>.zip in output_dir. The temporary directory is removed
    whether or not the download succeeds.
    """
    temp_dir = get_package_source_directory(pkg, output_dir)
    try:
        src_dir = Path(temp_dir, "src")
        src_dir.mkdir(parents=True, exist_ok=True)
        downloader(pkg, src_dir)
        return utils.dir_to_zip(src_dir, Path(output_dir, get_source_archive_file_name(pkg)))
    finally:
        if not utils.remove_dir(temp_dir):
            logger.warning(f"The directory {temp_dir} does not exist.")
