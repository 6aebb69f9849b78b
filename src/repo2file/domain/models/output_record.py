"""OutputRecord model - one file in the concatenated output"""

from dataclasses import dataclass

RECORD_TEMPLATE = "\n\n// File: {path}\n\n{content}"


@dataclass(frozen=True)
class OutputRecord:
    """A source path and its text content, written verbatim"""

    source_path: str
    content: str

    def render(self) -> str:
        return RECORD_TEMPLATE.format(path=self.source_path, content=self.content)
