from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from skillport.constants import (
    DEFAULT_SKILL_NAME,
    DOC_EXTENSION,
    SOURCE_HOST_ROOT,
    TARGET_HOST_ROOT,
    TEXT_EXTENSIONS,
    WORKFLOW_DIR_NAME,
)

CategoryName = Literal["commands", "workflows", "agents", "references", "templates"]

DEFAULT_DESCRIPTION = (
    "Adapt the official Get Shit Done (GSD) workflow for Codex sessions. Use when the user asks to run "
    "GSD-style project planning/execution flows (for example /gsd:new-project, /gsd:plan-phase, "
    "/gsd:execute-phase, /gsd:verify-work, debugging, roadmap updates), and Codex needs the corresponding "
    "command, workflow, agent, or template references."
)


class CategoryConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    name: CategoryName
    title: str
    source: str  # relative to the project root
    dest: str  # relative to the skill root
    extension: Optional[str] = None  # required extension for inclusion
    exclude_suffixes: List[str] = []
    count_names: List[str] = []  # exact names counted alongside docs in the manifest

    def includes(self, _path: Path, name: str) -> bool:
        """Inclusion predicate applied while copying."""
        if self.extension and not name.endswith(self.extension):
            return False
        return not any(name.endswith(suffix) for suffix in self.exclude_suffixes)

    def counts(self, _path: Path, name: str) -> bool:
        """Predicate for files counted in the manifest."""
        return name.endswith(DOC_EXTENSION) or name in self.count_names


def default_categories() -> List[CategoryConfig]:
    workflow_root = WORKFLOW_DIR_NAME
    return [
        CategoryConfig(
            name="commands",
            title="Commands",
            source="commands/gsd",
            dest="references/commands",
            extension=DOC_EXTENSION,
            exclude_suffixes=[".bak.md"],
        ),
        CategoryConfig(
            name="workflows",
            title="Workflows",
            source=f"{workflow_root}/workflows",
            dest="references/workflows",
        ),
        CategoryConfig(
            name="agents",
            title="Agents",
            source="agents",
            dest="references/agents",
            extension=DOC_EXTENSION,
        ),
        CategoryConfig(
            name="references",
            title="References",
            source=f"{workflow_root}/references",
            dest="references/references",
        ),
        CategoryConfig(
            name="templates",
            title="Templates",
            source=f"{workflow_root}/templates",
            dest="references/templates",
            count_names=["config.json"],
        ),
    ]


class RuntimeAssetsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    source: str = WORKFLOW_DIR_NAME
    dest: str = WORKFLOW_DIR_NAME


class RewriteConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    source_root: str = SOURCE_HOST_ROOT
    target_root: str = TARGET_HOST_ROOT
    workflow_dir: str = WORKFLOW_DIR_NAME


class InterfaceConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    display_name: str = "GSD Codex"
    short_description: str = "Get Shit Done workflow for Codex"
    default_prompt: str = (
        "Apply the official GSD workflow in this repository and execute the next concrete command safely."
    )


class SkillConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    skill_name: str = DEFAULT_SKILL_NAME
    output_dir: Optional[str] = None  # defaults to skills/<skill_name>
    title: str = "GSD for Codex"
    index_heading: str = "GSD Codex Index"
    description: str = DEFAULT_DESCRIPTION
    interface: InterfaceConfig = Field(default_factory=InterfaceConfig)
    rewrite: RewriteConfig = Field(default_factory=RewriteConfig)
    text_extensions: List[str] = list(TEXT_EXTENSIONS)
    categories: List[CategoryConfig] = Field(default_factory=default_categories)
    runtime_assets: Optional[RuntimeAssetsConfig] = Field(default_factory=RuntimeAssetsConfig)
    package_descriptor: str = "package.json"

    @field_validator("skill_name")
    @classmethod
    def validate_skill_name(cls, v: str) -> str:
        """Skill names become a path segment in rewritten references."""
        import re

        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(f"Invalid skill name: {v}. Expected kebab-case (e.g., 'gsd-codex')")
        return v

    @field_validator("text_extensions")
    @classmethod
    def normalize_text_extensions(cls, v: List[str]) -> List[str]:
        normalized: List[str] = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = f".{ext}"
            if ext not in normalized:
                normalized.append(ext)
        return normalized

    @model_validator(mode="after")
    def validate_categories(self) -> "SkillConfig":
        names = [category.name for category in self.categories]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate categories: {', '.join(duplicates)}")
        return self

    def resolve_output_dir(self, project_root: Path) -> Path:
        """Absolute skill root for ``project_root``."""
        output = Path(self.output_dir) if self.output_dir else Path("skills") / self.skill_name
        output = output.expanduser()
        if not output.is_absolute():
            output = project_root / output
        return output
