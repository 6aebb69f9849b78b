"""Service that concatenates a source tree into one output file"""

import logging
from pathlib import Path
from typing import Callable, Optional

from repo2file.domain.models.concat_summary import ConcatSummary
from repo2file.infrastructure.emitter import RecordEmitter, read_record
from repo2file.infrastructure.file_walker import LocalFileWalker
from repo2file.infrastructure.inclusion_policy import InclusionPolicy

logger = logging.getLogger(__name__)

EmitterFactory = Callable[[Path], RecordEmitter]


class ConcatService:
    """Walks a tree, filters it and writes the selected files in traversal order"""

    def __init__(
        self,
        policy: InclusionPolicy,
        walker: Optional[LocalFileWalker] = None,
        encoding: str = "utf-8",
        emitter_factory: Optional[EmitterFactory] = None,
    ):
        """Initialize concat service

        Args:
            policy: Inclusion policy deciding on each candidate path
            walker: Traversal source (default walker if None)
            encoding: Encoding used to read sources and write output
            emitter_factory: Builds the emitter for an output path (RecordEmitter if None)
        """
        self.policy = policy
        self.walker = walker or LocalFileWalker()
        self.encoding = encoding
        self.emitter_factory = emitter_factory or (
            lambda path: RecordEmitter(path, encoding=self.encoding)
        )

    def run(self, root: Path, output_path: Path) -> ConcatSummary:
        """Concatenate every included file under root into output_path

        The output file is opened before traversal and closed at the end, also
        when a selected file cannot be read. Whatever was written stays on disk.

        Args:
            root: Local directory to walk
            output_path: File receiving the records

        Returns:
            Run statistics

        Raises:
            OutputError: If the output file cannot be created or written
            FileReadError: If a selected file cannot be read as text
        """
        summary = ConcatSummary(output_path=Path(output_path))
        logger.info(f"Starting concatenation of: {root}")

        with self.emitter_factory(output_path) as emitter:
            candidates = [
                path for path in self.walker.walk(root) if not self._is_output(path, output_path)
            ]
            summary.files_found = len(candidates)

            included, excluded = self.policy.filter_paths(candidates)
            summary.excluded = [(str(path), reason) for path, reason in excluded]

            for i, path in enumerate(included, 1):
                logger.debug(f"Processing file {i}/{len(included)}: {path}")
                emitter.emit(read_record(path, encoding=self.encoding))
                summary.files_included += 1

            summary.bytes_written = emitter.bytes_written

        logger.info(
            f"Concatenation complete. Included {summary.files_included}/{summary.files_found} files"
        )
        return summary

    @staticmethod
    def _is_output(path: Path, output_path: Path) -> bool:
        try:
            return Path(path).resolve() == Path(output_path).resolve()
        except OSError:
            return False
