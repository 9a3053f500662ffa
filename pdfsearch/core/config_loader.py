"""
Configuration loader for the PDF Keyword Search engine.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    data_directory: Path
    logs_directory: Path


@dataclass
class ExtractionConfig:
    """Configuration for PDF discovery and extraction settings."""
    primary_backend: str
    fallback_backend: str
    max_file_size_mb: float
    supported_extensions: List[str]


@dataclass
class CacheConfig:
    """Configuration for the extracted-text cache."""
    capacity: int
    eviction_policy: str


@dataclass
class SearchConfig:
    """Configuration for keyword matching and the parallel scheduler."""
    match_mode: str
    max_workers: int
    order_by_size: bool
    page_window_chars: int
    line_context: int
    multi_line_context: int
    max_context_lines: int
    max_context_chars: int
    multi_max_context_chars: int
    truncation_marker: str
    exact_page_resolution: bool
    lines_per_page: int


@dataclass
class ViewerConfig:
    """Configuration for single-document page viewing."""
    preview_lines: int
    max_document_size_mb: float


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    extraction: ExtractionConfig
    cache: CacheConfig
    search: SearchConfig
    viewer: ViewerConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            data_directory=cls._resolve_path(paths_data.get("data_directory", "data"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root)
        )

        ext_data = data.get("extraction", {})
        extraction = ExtractionConfig(
            primary_backend=ext_data.get("primary_backend", "pypdf"),
            fallback_backend=ext_data.get("fallback_backend", "pdfplumber"),
            max_file_size_mb=ext_data.get("max_file_size_mb", 0),
            supported_extensions=ext_data.get("supported_extensions", [".pdf"])
        )

        cache_data = data.get("cache", {})
        cache = CacheConfig(
            capacity=cache_data.get("capacity", 100),
            eviction_policy=cache_data.get("eviction_policy", "insert_if_room")
        )

        search_data = data.get("search", {})
        search = SearchConfig(
            match_mode=search_data.get("match_mode", "pages"),
            max_workers=search_data.get("max_workers", 0),
            order_by_size=search_data.get("order_by_size", True),
            page_window_chars=search_data.get("page_window_chars", 30),
            line_context=search_data.get("line_context", 1),
            multi_line_context=search_data.get("multi_line_context", 2),
            max_context_lines=search_data.get("max_context_lines", 10),
            max_context_chars=search_data.get("max_context_chars", 200),
            multi_max_context_chars=search_data.get("multi_max_context_chars", 300),
            truncation_marker=search_data.get("truncation_marker", "..."),
            exact_page_resolution=search_data.get("exact_page_resolution", True),
            lines_per_page=search_data.get("lines_per_page", 40)
        )

        viewer_data = data.get("viewer", {})
        viewer = ViewerConfig(
            preview_lines=viewer_data.get("preview_lines", 10),
            max_document_size_mb=viewer_data.get("max_document_size_mb", 50)
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        cls._validate(cache, search)

        return cls(
            paths=paths,
            extraction=extraction,
            cache=cache,
            search=search,
            viewer=viewer,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _validate(cache: CacheConfig, search: SearchConfig) -> None:
        """Reject values the engine cannot work with."""
        if cache.capacity < 0:
            raise ConfigurationError(
                "cache.capacity must be zero or positive",
                {"capacity": cache.capacity}
            )

        if cache.eviction_policy not in ("insert_if_room", "lru"):
            raise ConfigurationError(
                f"Unknown cache eviction policy: {cache.eviction_policy}",
                {"eviction_policy": cache.eviction_policy}
            )

        if search.match_mode not in ("pages", "text"):
            raise ConfigurationError(
                f"Unknown match mode: {search.match_mode}",
                {"match_mode": search.match_mode}
            )

        if search.lines_per_page <= 0:
            raise ConfigurationError(
                "search.lines_per_page must be positive",
                {"lines_per_page": search.lines_per_page}
            )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)


if __name__ == "__main__":
    try:
        config = get_config()
        print(f"Project root: {config.project_root}")
        print(f"Logs directory: {config.paths.logs_directory}")
        print(f"Primary backend: {config.extraction.primary_backend}")
        print(f"Match mode: {config.search.match_mode}")
        print(f"Cache: {config.cache.capacity} entries ({config.cache.eviction_policy})")
    except ConfigurationError as e:
        print(f"Config error: {e.message}")
