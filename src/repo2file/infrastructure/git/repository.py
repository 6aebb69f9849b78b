"""Remote repository acquisition via git clone"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from repo2file.domain.config.acquisition import AcquisitionConfig
from repo2file.domain.errors import AcquisitionError

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "repo2file-"


class RepositoryAcquirer:
    """Clones remote repositories into temporary working copies"""

    def __init__(
        self,
        url_prefixes: Iterable[str] = ("https://github.com/",),
        clone_depth: Optional[int] = None,
        git_executable: str = "git",
        timeout: Optional[float] = None,
    ):
        self.url_prefixes = tuple(url_prefixes)
        self.clone_depth = clone_depth
        self.git_executable = git_executable
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: AcquisitionConfig) -> RepositoryAcquirer:
        return cls(
            url_prefixes=config.url_prefixes,
            clone_depth=config.clone_depth,
            git_executable=config.git_executable,
            timeout=config.timeout,
        )

    def is_remote(self, location: str) -> bool:
        """Check whether an input is a remote repository locator

        Anything not starting with a known prefix is a local path, even if malformed.
        """
        return any(location.startswith(prefix) for prefix in self.url_prefixes)

    def clone_command(self, url: str, destination: Path) -> List[str]:
        cmd = [self.git_executable, "clone", "--quiet"]
        if self.clone_depth:
            cmd += ["--depth", str(self.clone_depth)]
        cmd += [url, str(destination)]
        return cmd

    def clone(self, url: str, destination: Path) -> Path:
        """Clone url into destination (blocking)

        Raises:
            AcquisitionError: If git is missing, fails or times out
        """
        cmd = self.clone_command(url, destination)
        logger.info(f"Cloning {url} into {destination}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise AcquisitionError(
                f"Failed to clone repository {url}: git executable '{self.git_executable}' not found"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise AcquisitionError(
                f"Failed to clone repository {url}: timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise AcquisitionError(f"Failed to clone repository {url}: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise AcquisitionError(
                f"Failed to clone repository {url} (exit code {result.returncode}): {stderr}"
            )
        logger.debug(f"Clone of {url} finished")
        return destination

    @contextmanager
    def acquire(self, url: str) -> Iterator[Path]:
        """Yield a local working copy of url, removed when the block exits"""
        with tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX) as temp_dir:
            yield self.clone(url, Path(temp_dir))
        logger.debug(f"Removed working copy of {url}")
