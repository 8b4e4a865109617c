import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

from kubeconf.common.error_types import ConfigFileNotFoundError, FileReadError, ValidationError

StrPath = Union[str, os.PathLike]


def resolve_relative_path(path: str, base_dir: Optional[StrPath] = None) -> str:
    """Join a relative `path` onto `base_dir`, normalizing both sides first.
    Absolute paths, or any path when `base_dir` is None, are returned unchanged."""
    if base_dir is None or os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(os.path.normpath(base_dir), os.path.normpath(path)))


def file_url_to_path(file_url: str) -> Path:
    """Convert a `file:` URL (e.g. `file:///home/me/.kube/config`) to a local path"""
    parsed = urlparse(file_url)
    if parsed.scheme != "file" or parsed.netloc not in ("", "localhost"):
        raise ValidationError(value=file_url, param="file_url", type_name="file URL")
    return Path(url2pathname(parsed.path))


def read_text_file(path: StrPath, description: str) -> str:
    """Read the whole file as is, mapping OS and decoding errors to application errors naming the file"""
    try:
        with open(path, "r", encoding="utf-8", newline="") as fp:
            return fp.read()
    except FileNotFoundError as exc:
        raise ConfigFileNotFoundError(description=description, path=str(path)) from exc
    except OSError as exc:
        raise FileReadError(description=description, path=str(path), reason=exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise FileReadError(description=description, path=str(path), reason=f"not valid UTF-8 ({exc.reason})") from exc
