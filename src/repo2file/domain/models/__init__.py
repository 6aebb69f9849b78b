"""Domain models"""

from repo2file.domain.models.concat_summary import ConcatSummary
from repo2file.domain.models.exclusion import DefaultExclusionSet
from repo2file.domain.models.filter_request import (
    FilterRequest,
    IgnoreRequest,
    IncludeRequest,
    build_filter_request,
)
from repo2file.domain.models.output_record import OutputRecord

__all__ = [
    "ConcatSummary",
    "DefaultExclusionSet",
    "FilterRequest",
    "IgnoreRequest",
    "IncludeRequest",
    "OutputRecord",
    "build_filter_request",
]
