"""
Configuration management for homeroles.

Handles:
- Data directory location
- Home layout file
- Logging level
- Seed for presence simulation
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = Path.home() / ".homeroles"
DEFAULT_LAYOUT_FILE = "layout.json"


@dataclass
class Config:
    """
    Main homeroles configuration.
    
    Stored at ~/.homeroles/config.json
    """
    # Paths
    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    layout_file: str = DEFAULT_LAYOUT_FILE
    
    # Runtime
    log_level: str = "INFO"
    vacation_seed: Optional[int] = None  # None = nondeterministic
    
    @property
    def config_path(self) -> Path:
        return self.data_dir / "config.json"
    
    @property
    def layout_path(self) -> Path:
        path = Path(self.layout_file)
        return path if path.is_absolute() else self.data_dir / path
    
    def ensure_data_dir(self) -> None:
        """Create data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
    
    def to_dict(self) -> dict:
        return {
            "layout_file": self.layout_file,
            "log_level": self.log_level,
            "vacation_seed": self.vacation_seed,
        }
    
    def save(self) -> None:
        """Save configuration to disk."""
        self.ensure_data_dir()
        
        with open(self.config_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        
        logger.debug(f"Configuration saved to {self.config_path}")
    
    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> "Config":
        """Load configuration from disk."""
        data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        config_path = data_dir / "config.json"
        
        if not config_path.exists():
            return cls(data_dir=data_dir)
        
        with open(config_path, 'r') as f:
            data = json.load(f)
        
        return cls(
            data_dir=data_dir,
            layout_file=data.get("layout_file", DEFAULT_LAYOUT_FILE),
            log_level=data.get("log_level", "INFO"),
            vacation_seed=data.get("vacation_seed"),
        )
    
    @classmethod
    def exists(cls, data_dir: Optional[Path] = None) -> bool:
        """Check if configuration exists."""
        data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        return (data_dir / "config.json").exists()


# Global config instance
_config: Optional[Config] = None


def get_config(data_dir: Optional[Path] = None) -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load(data_dir)
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
