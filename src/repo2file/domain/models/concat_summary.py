"""ConcatSummary model - statistics of one run"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass
class ConcatSummary:
    """Report returned after the output file is written"""

    output_path: Optional[Path] = None
    files_found: int = 0
    files_included: int = 0
    bytes_written: int = 0
    excluded: List[Tuple[str, str]] = field(default_factory=list)  # (path, reason)

    @property
    def files_excluded(self) -> int:
        return len(self.excluded)
