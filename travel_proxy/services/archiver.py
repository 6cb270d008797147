"""
Archive builder producing gzip tarball snapshots of the project tree or its
web build.
"""

import asyncio
import logging
import shlex
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from travel_proxy.core.error_handler import SubprocessError
from travel_proxy.models.requests import ArchiveType


logger = logging.getLogger(__name__)

DEFAULT_EXCLUDES = (
    "node_modules",
    ".expo",
    "dist",
    ".git",
    "*.log",
    ".DS_Store",
    "__pycache__",
    ".venv",
)


def archive_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp safe for filenames, down to microseconds"""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S-%fZ")


@dataclass(frozen=True)
class ArchiveJob:
    """A single archive request and the temporary file it writes."""

    archive_type: ArchiveType
    filename: str
    temp_path: Path

    @classmethod
    def create(
        cls,
        archive_type: Union[ArchiveType, str],
        tmp_dir: Union[str, Path] = "/tmp",
        name_prefix: str = "travel-app",
        now: Optional[datetime] = None,
    ) -> "ArchiveJob":
        archive_type = ArchiveType(archive_type)
        filename = f"{name_prefix}-{archive_type.value}-{archive_timestamp(now)}.tar.gz"
        # Timestamps can repeat under concurrent requests; the random prefix cannot
        temp_path = Path(tmp_dir) / f"{uuid.uuid4().hex}-{filename}"
        return cls(archive_type=archive_type, filename=filename, temp_path=temp_path)


class Archiver(ABC):
    """Capability that turns an archive job into gzip tarball bytes."""

    @abstractmethod
    async def archive(self, job: ArchiveJob) -> bytes:
        """Produce the archive for ``job`` and return its full contents."""


class TarArchiver(Archiver):
    """
    Archiver shelling out to ``tar``.

    Source archives cover the whole project root minus the exclude globs. Build
    archives run the build command first and then archive only the build
    output directory. The temporary file is removed on every exit path.
    """

    def __init__(
        self,
        project_root: Union[str, Path] = ".",
        excludes: Sequence[str] = DEFAULT_EXCLUDES,
        build_command: str = "npm run export:web",
        build_output_dir: str = "dist",
        tar_executable: str = "tar",
    ):
        self.project_root = Path(project_root).resolve()
        self.excludes = list(excludes)
        self.build_command = build_command
        self.build_output_dir = build_output_dir
        self.tar_executable = tar_executable

    def source_command(self, output_path: Path) -> List[str]:
        excludes = [f"--exclude={pattern}" for pattern in self.excludes]
        return [
            self.tar_executable, "-czf", str(output_path),
            *excludes,
            "-C", str(self.project_root), ".",
        ]

    def build_archive_command(self, output_path: Path) -> List[str]:
        return [
            self.tar_executable, "-czf", str(output_path),
            "-C", str(self.project_root), self.build_output_dir,
        ]

    async def _run(self, args: List[str], description: str) -> None:
        """Run a subprocess to completion, raising SubprocessError on failure"""
        logger.info(f"Running {description}: {' '.join(shlex.quote(a) for a in args)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                cwd=str(self.project_root),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise SubprocessError(
                "Failed to create download",
                details=f"{description} could not start: {e}",
            ) from e

        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            logger.warning(f"{description} cancelled; terminating process {process.pid}")
            if process.returncode is None:
                process.kill()
            await process.wait()
            raise

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip() or "no error output"
            raise SubprocessError(
                "Failed to create download",
                details=f"{description} exited with status {process.returncode}: {message}",
            )

    async def archive(self, job: ArchiveJob) -> bytes:
        output_path = job.temp_path
        try:
            if job.archive_type == ArchiveType.BUILD:
                await self._run(shlex.split(self.build_command), "build step")
                await self._run(self.build_archive_command(output_path), "tar")
            else:
                await self._run(self.source_command(output_path), "tar")

            content = output_path.read_bytes()
        finally:
            output_path.unlink(missing_ok=True)

        logger.info(f"Created {job.filename} ({len(content)} bytes)")
        return content


@dataclass(frozen=True)
class ArchiveResult:
    job: ArchiveJob
    content: bytes

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.job.filename}"'


class ArchiveBuilder:
    """Creates an archive job per request and hands it to an Archiver."""

    def __init__(
        self,
        archiver: Archiver,
        tmp_dir: Union[str, Path] = "/tmp",
        name_prefix: str = "travel-app",
    ):
        self.archiver = archiver
        self.tmp_dir = Path(tmp_dir)
        self.name_prefix = name_prefix

    async def build(self, archive_type: Union[ArchiveType, str]) -> ArchiveResult:
        job = ArchiveJob.create(archive_type, self.tmp_dir, self.name_prefix)
        content = await self.archiver.archive(job)
        return ArchiveResult(job=job, content=content)
