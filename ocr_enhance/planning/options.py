"""
Run options resolution.

Simple switches are read from the prompt with local keyword rules; the
remote planner is consulted only when no rule matches.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from ocr_enhance.exceptions import PlannerError
from ocr_enhance.imaging.base import OperationKind
from ocr_enhance.planning.base import RunOptionsPlanner
from ocr_enhance.schemas.options import RunOptions

logger = logging.getLogger(__name__)


def contains_any(*phrases: str) -> Callable[[str], bool]:
    """Predicate matching a lower-cased prompt containing any of the phrases."""
    return lambda prompt: any(phrase in prompt for phrase in phrases)


@dataclass(frozen=True)
class KeywordRule:
    """A prompt predicate and the option overrides applied when it matches."""

    name: str
    matches: Callable[[str], bool]
    overrides: dict


# Evaluated in order, first match wins
OUTPUT_RULES = (
    KeywordRule("only_json", contains_any("only json", "return only json"), {"save_txt": False, "save_json": True}),
    KeywordRule("only_text", contains_any("only text", "return only text"), {"save_txt": True, "save_json": False}),
    KeywordRule(
        "no_files",
        contains_any("no files", "don't write files", "do not write files"),
        {"save_txt": False, "save_json": False},
    ),
)

ENHANCEMENT_RULES = (
    KeywordRule("ocr_only", contains_any("ocr only", "do not enhance", "don't enhance"), {"run_enhancement": False}),
    KeywordRule("variants", contains_any("variant", "variants", "create 3"), {"run_enhancement": True}),
    KeywordRule(
        "enhance",
        contains_any("enhance", "improve", "contrast", *OperationKind.names()),
        {"run_enhancement": True},
    ),
)


def local_base_options() -> RunOptions:
    """Options used when local rules decide, or when the remote call fails."""
    return RunOptions(
        run_enhancement=False,
        include_original=True,
        save_txt=True,
        save_json=True,
        language="eng",
    )


def _first_match(rules, prompt: str) -> KeywordRule | None:
    for rule in rules:
        if rule.matches(prompt):
            return rule
    return None


class RunOptionsResolver:
    """
    Derives RunOptions from a free-form prompt.

    Args:
        remote: Planner consulted when no local rule matches. If None,
            the local base options are returned instead.
    """

    def __init__(self, remote: RunOptionsPlanner | None = None):
        self.remote = remote

    def resolve_locally(self, prompt: str) -> RunOptions | None:
        """
        Apply the keyword rules.

        Returns:
            Resolved options, or None when no rule matched. The language is
            never changed here.
        """
        text = prompt.lower()
        matched = [
            rule
            for rule in (_first_match(OUTPUT_RULES, text), _first_match(ENHANCEMENT_RULES, text))
            if rule is not None
        ]
        if not matched:
            return None

        overrides = {}
        for rule in matched:
            overrides.update(rule.overrides)

        logger.debug(f"Local option rules matched: {[rule.name for rule in matched]}")
        return local_base_options().model_copy(update=overrides)

    async def resolve(self, prompt: str | None) -> RunOptions:
        """
        Resolve run options for a prompt.

        Blank prompts get the model defaults. Remote planner failures fall
        back to the local base options; cancellation propagates.
        """
        if prompt is None or not prompt.strip():
            return RunOptions()

        local = self.resolve_locally(prompt)
        if local is not None:
            logger.info(
                f"Options resolved locally: enhance={local.run_enhancement}, "
                f"txt={local.save_txt}, json={local.save_json}"
            )
            return local

        if self.remote is None:
            logger.info("No options planner configured, using local defaults")
            return local_base_options()

        try:
            options = await self.remote.get_options(prompt)
        except (PlannerError, httpx.HTTPError, ValidationError) as e:
            logger.warning(f"Options planner failed, using local defaults: {e}")
            return local_base_options()

        logger.info(
            f"Options resolved remotely: enhance={options.run_enhancement}, "
            f"txt={options.save_txt}, json={options.save_json}, language={options.language}"
        )
        return options
