from pathlib import Path
from typing import Optional, Type, TypeVar

import yaml
from instrukt_ai_logging import get_logger
from pydantic import BaseModel

from skillport.config.schema import SkillConfig
from skillport.constants import CONFIG_FILENAME

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def _warn_unknown_keys(model: BaseModel, path: str, config_path: Path) -> None:
    """Log extra keys on ``model``, then on nested models and model lists (e.g. categories)."""
    if model.model_extra:
        logger.warning("Unknown keys in %s at %s: %s", path, config_path, list(model.model_extra.keys()))

    for field_name, field_value in model.__dict__.items():
        if isinstance(field_value, BaseModel):
            _warn_unknown_keys(field_value, f"{path}.{field_name}", config_path)
        elif isinstance(field_value, list):
            for index, item in enumerate(field_value):
                if isinstance(item, BaseModel):
                    _warn_unknown_keys(item, f"{path}.{field_name}[{index}]", config_path)


def load_config(path: Path, model_class: Type[T]) -> T:
    """Validate the YAML mapping at ``path`` into ``model_class``.

    A missing file yields the model defaults; unparsable YAML or a
    non-mapping document yields the defaults with a warning. Invalid values
    raise ``ValidationError`` so the CLI can report them.
    """
    if not path.exists():
        return model_class()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except Exception as e:
        logger.warning("Failed to read config file %s: %s", path, e)
        return model_class()

    if not isinstance(raw, dict):
        logger.warning("Ignoring config file %s: top level must be a mapping", path)
        return model_class()

    model = model_class.model_validate(raw)
    _warn_unknown_keys(model, "root", path)
    return model


def load_skill_config(project_root: Path, path: Optional[Path] = None) -> SkillConfig:
    """Load ``skillport.yml`` from ``project_root`` (or an explicit path)."""
    if path is None:
        path = project_root / CONFIG_FILENAME
    return load_config(path, SkillConfig)
