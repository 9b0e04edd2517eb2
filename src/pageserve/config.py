"""Configuration management for pageserve.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "pageserve.toml"

CATEGORY_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class PagesConfig:
    """Page content configuration."""

    root: Path = field(default_factory=lambda: Path("."))
    default: str | None = None
    index: dict[str, str] = field(default_factory=dict)
    template: Path | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    pages: PagesConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for pageserve.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        """Create config with all defaults.

        Returns:
            Config instance with default values
        """
        return cls(server=ServerConfig(), pages=PagesConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        server = cls._parse_server(data.get("server"))
        pages = cls._parse_pages(data.get("pages"), config_dir)

        return cls(server=server, pages=pages, config_path=path)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_pages(cls, data: object, config_dir: Path) -> PagesConfig:
        """Parse pages configuration section.

        Args:
            data: Raw pages section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            PagesConfig instance
        """
        if data is None:
            return PagesConfig(root=config_dir)

        if not isinstance(data, dict):
            raise ValueError("pages section must be a dictionary")

        root = data.get("root", ".")
        if not isinstance(root, str):
            raise ValueError("pages.root must be a string")

        template = data.get("template")
        if template is not None and not isinstance(template, str):
            raise ValueError("pages.template must be a string")

        index = cls._parse_index(data.get("index"))

        default = data.get("default")
        if default is None and index:
            default = next(iter(index))
        if default is not None:
            if not isinstance(default, str):
                raise ValueError("pages.default must be a string")
            if default not in index:
                raise ValueError(f"pages.default '{default}' is not a configured category")

        return PagesConfig(
            root=config_dir / root,
            default=default,
            index=index,
            template=config_dir / template if template is not None else None,
        )

    @classmethod
    def _parse_index(cls, data: object) -> dict[str, str]:
        """Parse pages.index: category name to seed file path.

        Args:
            data: Raw pages.index section data

        Returns:
            Mapping of category to path relative to pages.root
        """
        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ValueError("pages.index section must be a dictionary")

        index: dict[str, str] = {}
        for category, path in data.items():
            if not CATEGORY_PATTERN.match(category):
                raise ValueError(
                    f"pages.index category '{category}' must contain only letters, digits and hyphens"
                )
            if not isinstance(path, str):
                raise ValueError(f"pages.index.{category} must be a string")
            index[category] = path

        return index

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        root: Path | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            root: Override pages.root

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        pages = self.pages
        if root is not None:
            pages = replace(self.pages, root=root)

        return replace(self, server=server, pages=pages)
