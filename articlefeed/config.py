import os
import tomli
from datetime import datetime
from typing import Dict, Any, Optional

DEFAULT_CONFIG_DIR = os.path.expanduser("~/.config/articlefeed")
DEFAULT_CONFIG_PATH = os.path.join(DEFAULT_CONFIG_DIR, "config.toml")

DEFAULT_CONFIG = """# articlefeed Configuration

[paging]
page_size = 50
max_page_size = 1000
# max_pages = 10

[feed]
# Fixed creation time of article 0; defaults to the time the feed starts
# epoch = "2024-01-01T00:00:00"

[server]
host = "127.0.0.1"
port = 8080
"""


class Config:
    """Configuration manager for articlefeed."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration from file."""
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.config_dir = os.path.dirname(self.config_path)
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from TOML file."""
        if not os.path.exists(self.config_path):
            return {}

        with open(self.config_path, "rb") as f:
            return tomli.load(f)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        if section not in self.config:
            return default
        if key not in self.config[section]:
            return default
        return self.config[section][key]

    @property
    def page_size(self) -> int:
        """Get number of articles loaded per page."""
        env_size = os.environ.get("ARTICLEFEED_PAGE_SIZE")
        if env_size:
            return int(env_size)
        return self.get("paging", "page_size", 50)

    @property
    def max_page_size(self) -> int:
        """Get largest page size the API accepts."""
        return self.get("paging", "max_page_size", 1000)

    @property
    def max_pages(self) -> Optional[int]:
        """Get maximum number of pages a pager keeps in memory."""
        return self.get("paging", "max_pages")

    @property
    def epoch(self) -> Optional[datetime]:
        """Get fixed creation time of article 0, if configured."""
        value = self.get("feed", "epoch")
        if value is None:
            return None
        # TOML datetimes arrive already parsed
        if isinstance(value, datetime):
            return value
        return datetime.fromisoformat(value)

    @property
    def api_host(self) -> str:
        """Get host the API server binds to."""
        return self.get("server", "host", "127.0.0.1")

    @property
    def api_port(self) -> int:
        """Get port the API server listens on."""
        return self.get("server", "port", 8080)


def init_config(config_path: Optional[str] = None) -> str:
    """Initialize configuration, returning the config file path."""
    config_path = config_path or DEFAULT_CONFIG_PATH
    config_dir = os.path.dirname(config_path)
    if config_dir:
        os.makedirs(config_dir, exist_ok=True)

    if not os.path.exists(config_path):
        with open(config_path, "w") as f:
            f.write(DEFAULT_CONFIG)
        print(f"Created configuration file at {config_path}")
    else:
        print(f"Configuration file already exists at {config_path}")

    return config_path
