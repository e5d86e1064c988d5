"""Rewrite host filesystem paths embedded in copied text files.

Rules are literal prefix substitutions applied in list order, each one over
the output of the previous rule. A rule whose matcher is contained in a later
rule's matcher would swallow the later rule's matches, so more specific
matchers must come first. ``check_rule_order`` enforces that up front.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from skillport.constants import SOURCE_HOST_ROOT, TARGET_HOST_ROOT, WORKFLOW_DIR_NAME


class RuleOrderError(ValueError):
    """Raised when a general rule would shadow a later, more specific one."""


@dataclass(frozen=True)
class RewriteRule:
    matcher: str
    replacement: str

    def compile(self) -> re.Pattern[str]:
        return re.compile(re.escape(self.matcher))


def build_rewrite_rules(
    skill_name: str,
    *,
    source_root: str = SOURCE_HOST_ROOT,
    target_root: str = TARGET_HOST_ROOT,
    workflow_dir: str = WORKFLOW_DIR_NAME,
) -> list[RewriteRule]:
    """Build the ordered source-host -> skill path table for ``skill_name``."""
    source_root = source_root.rstrip("/")
    skill_root = f"{target_root.rstrip('/')}/{skill_name}"

    workflow_prefix = f"{source_root}/{workflow_dir}"
    target_workflow_prefix = f"{skill_root}/{workflow_dir}"

    return [
        RewriteRule(f"{workflow_prefix}/", f"{target_workflow_prefix}/"),
        RewriteRule(workflow_prefix, target_workflow_prefix),
        RewriteRule(f"{source_root}/agents/", f"{skill_root}/references/agents/"),
        RewriteRule(f"{source_root}/commands/", f"{skill_root}/references/commands/"),
        RewriteRule(f"{source_root}/cache/", f"{skill_root}/cache/"),
        RewriteRule(f"{source_root}/", f"{skill_root}/"),
    ]


def check_rule_order(rules: Sequence[RewriteRule]) -> None:
    """Reject tables where an earlier matcher is contained in a later one."""
    for i, earlier in enumerate(rules):
        for later in rules[i + 1 :]:
            if earlier.matcher in later.matcher:
                raise RuleOrderError(
                    f"Rewrite rule {earlier.matcher!r} shadows later rule {later.matcher!r}; "
                    "order more specific matchers first"
                )


def rewrite_paths(content: str, rules: Sequence[RewriteRule]) -> str:
    """Apply ``rules`` to ``content`` in order and return the rewritten text."""
    rewritten = content
    for rule in rules:
        if not rule.matcher:
            continue
        # Callable replacement keeps the literal intact (no backslash expansion).
        rewritten = rule.compile().sub(lambda _match, value=rule.replacement: value, rewritten)
    return rewritten
