import json
import os
import shutil
import zipfile
from pathlib import Path
from typing import Union, Any

p = Path(__file__).resolve()


def load_env_file(filepath=Path(".env").resolve()):
    """
    Load KEY=VALUE lines from a .env file into os.environ.

    Values already present in the environment win over the file.
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                key, value = line.split('=', 1)
                os.environ.setdefault(key.strip(), value.strip().strip('"').strip("'"))
    except FileNotFoundError:
        pass


def read_json_file(json_path: Union[str, Path], encoding: str = "utf-8") -> Any:
    """
    Read and parse a JSON file.

    Returns:
        The parsed JSON content (usually a dict or list).

    Raises:
        FileNotFoundError: if the file doesn't exist
        ValueError: if the JSON is invalid
        OSError: for other file I/O errors
    """
    path = Path(json_path)

    try:
        with path.open("r", encoding=encoding) as f:
            return json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"JSON file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path} (line {e.lineno}, col {e.colno}): {e.msg}") from e


def is_true(value: Any) -> bool:
    # only "true" (any case) counts as true
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"


def env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


def env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, ""))
    except ValueError:
        return default


def dir_to_zip(src_dir: Union[str, Path], zip_path: Union[str, Path]) -> Path:
    """
    Pack every file below src_dir into zip_path, using paths relative to src_dir.

    An existing archive at zip_path is overwritten.
    """
    src = Path(src_dir)
    out = Path(zip_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(out, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        if src.is_dir():
            for f in sorted(src.rglob("*")):
                if f.is_file():
                    zf.write(f, f.relative_to(src).as_posix())
    return out


def remove_dir(path: Union[str, Path]) -> bool:
    d = Path(path)
    if not d.exists():
        return False
    shutil.rmtree(d)
    return True
