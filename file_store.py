# file_store.py
import os
import re
import secrets
import time
from pathlib import Path
from typing import Any, Dict, List

MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "pdf": "application/pdf",
    "txt": "text/plain",
    "json": "application/json",
    "xml": "application/xml",
    "csv": "text/csv",
    "mp4": "video/mp4",
    "mp3": "audio/mpeg",
    "zip": "application/zip",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class FileStoreError(Exception):
    pass


class InvalidFilenameError(FileStoreError):
    pass


class FileTooLargeError(FileStoreError):
    pass


def check_filename(name: str) -> str:
    """Reject empty names and anything that could escape the store directory."""
    if not name or not name.strip():
        raise InvalidFilenameError("Filename is required")
    if name == "." or ".." in name or "/" in name or "\\" in name:
        raise InvalidFilenameError("Invalid filename")
    return name


def check_size(name: str, size: int, limit: int) -> None:
    if size > limit:
        raise FileTooLargeError(
            f"File {name} too large. Maximum size is {limit // (1024 * 1024)}MB"
        )


def check_batch_size(total: int, limit: int) -> None:
    if total > limit:
        raise FileTooLargeError(
            f"Upload too large ({total} bytes). Maximum total size is {limit // (1024 * 1024)}MB"
        )


def client_filename(raw: str) -> str:
    """Strip any directory part a browser may send along with an upload name."""
    name = (raw or "").replace("\\", "/").rsplit("/", 1)[-1]
    return check_filename(name)


def safe_stem(text: str, default: str) -> str:
    """Turn free text such as a person's name into a filename stem.

    Whitespace becomes ``_``; only word characters (any script) and ``-`` survive.
    """
    stem = re.sub(r"\s+", "_", text.strip())
    return re.sub(r"[^\w-]", "", stem) or default


def unique_name(original: str) -> str:
    stem, ext = os.path.splitext(original)
    return f"{stem}_{int(time.time() * 1000)}_{secrets.token_hex(3)}{ext}"


def guess_mime_type(name: str) -> str:
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    return MIME_TYPES.get(ext, "application/octet-stream")


class FileStore:
    """A flat directory of files; the directory listing is the index."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def directory_exists(self) -> bool:
        return self.directory.is_dir()

    def path_for(self, name: str) -> Path:
        return self.directory / check_filename(name)

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str) -> bytes:
        path = self.path_for(name)
        if not path.is_file():
            raise FileNotFoundError(name)
        return path.read_bytes()

    def save(self, name: str, data: bytes) -> Dict[str, Any]:
        path = self.path_for(name)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return self.meta(name)

    def meta(self, name: str) -> Dict[str, Any]:
        stats = self.path_for(name).stat()
        return {
            "name": name,
            "size": stats.st_size,
            "type": guess_mime_type(name),
            "lastModified": int(stats.st_mtime * 1000),
        }

    def list(self) -> List[Dict[str, Any]]:
        if not self.directory_exists():
            return []
        return [self.meta(p.name) for p in sorted(self.directory.iterdir()) if p.is_file()]

    def list_png(self) -> List[str]:
        if not self.directory_exists():
            return []
        return sorted(p.name for p in self.directory.glob("*.png") if p.is_file())
