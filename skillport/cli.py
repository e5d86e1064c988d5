"""skillport: package a Claude command/workflow tree as a Codex skill."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from instrukt_ai_logging import get_logger
from pydantic import ValidationError

from skillport.config.loader import load_skill_config
from skillport.logging_config import setup_logging
from skillport.pipeline import OutputLocationError, generate_skill
from skillport.provenance import ProvenanceProvider, StaticProvenance
from skillport.rewrite import RuleOrderError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skillport", description="Generate a Codex skill from GSD sources.")
    parser.add_argument(
        "--project-root",
        default=".",
        help="Project root holding commands/, agents/ and the workflow tree (default: cwd).",
    )
    parser.add_argument("--config", help="Config file (default: <project-root>/skillport.yml).")
    parser.add_argument("--skill-name", help="Override the generated skill name.")
    parser.add_argument("--output", help="Override the skill output directory.")
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Skip git provenance lookups and record local sentinels.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override SKILLPORT_LOG_LEVEL.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    project_root = Path(args.project_root).expanduser().resolve()
    config_path = Path(args.config).expanduser() if args.config else None
    provider: ProvenanceProvider | None = StaticProvenance() if args.no_git else None

    try:
        config = load_skill_config(project_root, config_path)
        if args.skill_name:
            config = config.model_validate({**config.model_dump(), "skill_name": args.skill_name})
        result = generate_skill(
            project_root,
            config=config,
            provider=provider,
            output_dir=Path(args.output) if args.output else None,
        )
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        raise SystemExit(1) from e
    except RuleOrderError as e:
        print(f"Invalid rewrite rules: {e}", file=sys.stderr)
        raise SystemExit(1) from e
    except OutputLocationError as e:
        print(f"Invalid output directory: {e}", file=sys.stderr)
        raise SystemExit(1) from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Skill generation failed: %s", e)
        print(f"Skill generation failed: {e}", file=sys.stderr)
        raise SystemExit(1) from e

    print("Generated skill at:")
    print(f"  {result.skill_root}")


if __name__ == "__main__":
    main()
