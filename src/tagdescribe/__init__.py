"""Compute version strings from the nearest tag in first-parent history."""

from .describe import DescribeEngine, describe, describe_repository
from .errors import DescribeError, GraphAccessError, RepositoryUnavailable
from .graph import GitPythonGraph, ObjectGraphAccess, open_graph
from .models import Absent, DescribeResult, Ok, ReleaseMode, TagRef

__all__ = [
    "DescribeEngine",
    "describe",
    "describe_repository",
    "DescribeError",
    "GraphAccessError",
    "RepositoryUnavailable",
    "GitPythonGraph",
    "ObjectGraphAccess",
    "open_graph",
    "Absent",
    "DescribeResult",
    "Ok",
    "ReleaseMode",
    "TagRef",
]
