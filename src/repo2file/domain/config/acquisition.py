"""Remote repository acquisition configuration model."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AcquisitionConfig(BaseModel):
    """Configuration for cloning remote repositories.

    Attributes:
        url_prefixes: Inputs starting with one of these are cloned, not walked
        clone_depth: Shallow clone depth (None = full history)
        git_executable: git binary used for cloning
        timeout: Seconds before the clone is aborted (None = no limit)
    """

    url_prefixes: List[str] = Field(default_factory=lambda: ["https://github.com/"])
    clone_depth: Optional[int] = Field(None, gt=0)
    git_executable: str = "git"
    timeout: Optional[float] = Field(None, gt=0)

    model_config = ConfigDict(extra="forbid")
