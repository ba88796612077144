from enum import Enum
from typing import Optional


class DescribeErrorType(str, Enum):
    REPOSITORY_UNAVAILABLE = "Repository unavailable"
    GRAPH_ACCESS = "Error reading object graph"


class DescribeError(Exception):
    error_type: DescribeErrorType = DescribeErrorType.GRAPH_ACCESS

    def __init__(self, message: str, object_id: Optional[str] = None):
        self.message = message
        self.object_id = object_id
        super().__init__(f"{self.error_type.value}: {message}")


class RepositoryUnavailable(DescribeError):
    """HEAD cannot be resolved or the repository cannot be opened."""

    error_type = DescribeErrorType.REPOSITORY_UNAVAILABLE


class GraphAccessError(DescribeError):
    """An object referenced while walking parents or peeling tags cannot be read."""

    error_type = DescribeErrorType.GRAPH_ACCESS
