"""Record emitter: reads selected files and writes them to the output file"""

import logging
from pathlib import Path
from typing import Optional, TextIO, Union

from repo2file.domain.errors import FileReadError, OutputError
from repo2file.domain.models.output_record import OutputRecord

logger = logging.getLogger(__name__)


def read_record(path: Union[str, Path], encoding: str = "utf-8") -> OutputRecord:
    """Read a file as text into an OutputRecord

    Args:
        path: File selected by the inclusion policy
        encoding: Text encoding of the file

    Returns:
        OutputRecord carrying the path as given and the file's content

    Raises:
        FileReadError: If the file is missing, unreadable or not valid text
    """
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(str(path), e) from e
    return OutputRecord(source_path=str(path), content=content)


class RecordEmitter:
    """Owns the output stream for one run

    Use as a context manager: the file is opened (and its parent directories
    created) on enter and closed on exit, whether or not the run succeeded.
    """

    def __init__(self, output_path: Path, encoding: str = "utf-8"):
        self.output_path = Path(output_path)
        self.encoding = encoding
        self.records_written = 0
        self.bytes_written = 0
        self._stream: Optional[TextIO] = None

    def __enter__(self) -> "RecordEmitter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = open(self.output_path, "w", encoding=self.encoding, newline="")
        except OSError as e:
            raise OutputError(f"Could not create output file '{self.output_path}': {e}") from e
        logger.debug(f"Opened output file {self.output_path}")

    def close(self) -> None:
        if self._stream is None:
            return
        try:
            self._stream.close()
        finally:
            self._stream = None

    def emit(self, record: OutputRecord) -> None:
        """Append one delimited record to the output stream

        Raises:
            OutputError: If the emitter is not open or the write fails
        """
        if self._stream is None:
            raise OutputError("Output file is not open")
        text = record.render()
        try:
            self._stream.write(text)
        except (OSError, UnicodeEncodeError) as e:
            raise OutputError(f"Failed to write {record.source_path} to '{self.output_path}': {e}") from e
        self.records_written += 1
        self.bytes_written += len(text.encode(self.encoding))
        logger.debug(f"Wrote {record.source_path} ({len(record.content)} chars)")
