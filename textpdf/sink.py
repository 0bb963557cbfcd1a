from __future__ import annotations

import io
import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from .errors import SinkCreateError, SinkPositionError, SinkWriteError

log = logging.getLogger(__name__)


class Sink(ABC):
    """
    Sequential byte sink owned by exactly one writer.

    ``position()`` must reflect every byte previously passed to ``write()``;
    the writer records object offsets from it.
    """

    @abstractmethod
    def write(self, data: bytes) -> None:
        ...

    @abstractmethod
    def position(self) -> int:
        ...

    def close(self) -> None:
        pass


class FileSink(Sink):
    def __init__(self, handle: BinaryIO, path: Path):
        self.path = path
        self._f = handle

    @classmethod
    def create(cls, path: str | Path) -> "FileSink":
        path = Path(path)
        try:
            handle = path.open("wb")
        except OSError as exc:
            raise SinkCreateError(f"cannot create {path}: {exc}") from exc
        return cls(handle, path)

    def write(self, data: bytes) -> None:
        try:
            self._f.write(data)
        except (OSError, ValueError) as exc:
            raise SinkWriteError(f"write to {self.path} failed: {exc}") from exc

    def position(self) -> int:
        # Buffered tell() includes bytes not yet flushed.
        try:
            return self._f.tell()
        except (OSError, ValueError) as exc:
            raise SinkPositionError(f"cannot query position in {self.path}: {exc}") from exc

    def sync(self) -> None:
        try:
            self._f.flush()
            os.fsync(self._f.fileno())
        except OSError as exc:
            raise SinkWriteError(f"flushing {self.path} failed: {exc}") from exc

    def close(self) -> None:
        if not self._f.closed:
            self._f.close()


class MemorySink(Sink):
    def __init__(self) -> None:
        self._buf = io.BytesIO()

    @classmethod
    def create(cls) -> "MemorySink":
        return cls()

    def write(self, data: bytes) -> None:
        self._buf.write(data)

    def position(self) -> int:
        return self._buf.tell()

    def getvalue(self) -> bytes:
        return self._buf.getvalue()


def _output_mode(out_path: Path) -> int:
    # Keep the mode of a file being replaced; new files get the umask default.
    try:
        return stat.S_IMODE(out_path.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _missing_parents(path: Path) -> list[Path]:
    missing = []
    for parent in path.parents:
        if parent.exists():
            break
        missing.append(parent)
    return missing


def _remove_dirs(dirs: list[Path]) -> None:
    # Deepest first; a directory someone else filled meanwhile stays.
    for directory in dirs:
        try:
            directory.rmdir()
        except OSError:
            log.debug("failed to remove directory: %s", directory)


@contextmanager
def atomic_file_sink(out_path: str | Path) -> Iterator[FileSink]:
    """
    Yield a sink backed by a temporary file next to ``out_path``.

    The temporary file replaces ``out_path`` only when the block exits
    cleanly; on any failure it is removed and ``out_path`` is untouched.
    Parent directories created for the output are removed again on failure.
    The promoted file gets the usual permissions for a new file (or those of
    the file it replaces), not the owner-only mode of temporary files.
    """
    out_path = Path(out_path)
    created_dirs = _missing_parents(out_path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(
            "wb",
            delete=False,
            dir=str(out_path.parent),
            prefix=f".{out_path.name}.",
            suffix=".tmp",
        )
    except OSError as exc:
        _remove_dirs(created_dirs)
        raise SinkCreateError(f"cannot create temporary file for {out_path}: {exc}") from exc

    tmp_path = Path(tmp.name)
    sink = FileSink(tmp, tmp_path)
    try:
        yield sink
        sink.sync()
        sink.close()
        try:
            os.chmod(tmp_path, _output_mode(out_path))
            os.replace(tmp_path, out_path)
        except OSError as exc:
            raise SinkWriteError(f"cannot move {tmp_path} to {out_path}: {exc}") from exc
        log.debug("promoted %s -> %s", tmp_path.name, out_path)
    except BaseException:
        try:
            sink.close()
        except OSError:
            pass
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            log.debug("failed to remove temporary file: %s", tmp_path)
        _remove_dirs(created_dirs)
        raise
