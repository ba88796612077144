from typing import Optional

from .config import TagdescribeConfig, load_config
from .graph import GitPythonGraph, open_graph


class AppContext:
    """State shared by CLI commands: repository location and configuration.

    The repository is opened lazily so that commands which fail on bad
    options never touch the filesystem.
    """

    def __init__(self, repo_path: str = ".", config: Optional[TagdescribeConfig] = None):
        self.repo_path = repo_path
        self.config: TagdescribeConfig = config or TagdescribeConfig()
        self._graph: Optional[GitPythonGraph] = None

    def load_config(self, config_path: Optional[str]):
        self.config = load_config(config_path)

    def get_graph(self) -> GitPythonGraph:
        if self._graph is None:
            self._graph = open_graph(
                self.repo_path, abbrev_min_length=self.config.abbrev.min_length
            )
        return self._graph
