from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml
from dotenv import load_dotenv

from .settings import Settings


class Config:
    """Load the run description from a YAML file and credentials from the .env environment."""

    def __init__(self, config_path: str = "config.yaml", env_path: str = ".env"):
        env_file = Path(env_path)
        if env_file.exists():
            load_dotenv(env_file)
        self._config_path = Path(config_path)
        self.config_data: Dict = {}
        if self._config_path.exists():
            with self._config_path.open() as f:
                self.config_data = yaml.safe_load(f) or {}
        self.settings = Settings()

    @property
    def base_dir(self) -> Path:
        return self._config_path.parent

    @property
    def engine(self) -> str:
        return self.config_data.get("engine", "snowflake")

    @property
    def target_schema(self) -> Optional[str]:
        """Schema applied to tables that do not name one."""
        return self.config_data.get("target_schema")

    @property
    def export_schema_dir(self) -> Optional[str]:
        return self.config_data.get("export_schema_dir")

    @property
    def replace_existing(self) -> bool:
        return bool(self.config_data.get("replace_existing", False))

    @property
    def verify(self) -> bool:
        return bool(self.config_data.get("verify", True))

    @property
    def tables(self) -> List[Union[str, Dict[str, Any]]]:
        """Inline table mappings or paths to YAML definition files (relative to the config file)."""
        return self.config_data.get("tables", [])
