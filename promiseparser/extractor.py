"""
Extraction Pipeline

Runs every registry rule over the text, resolves each match into a
candidate and hands all candidates to the conflict resolver.
"""

import logging
from typing import List, Optional

from .conflicts import reconcile
from .promise import ExtractedDate, ExtractionContext
from .registry import Rule, RuleRegistry, registry as default_registry

logger = logging.getLogger(__name__)


class PromiseDateExtractor:
    """
    Extracts promise dates from text.

    The extractor holds only the compiled registry; the reference date and
    the history mode travel with each call in an ExtractionContext.
    """

    def __init__(self, registry: Optional[RuleRegistry] = None):
        self._registry = registry or default_registry

    def extract(self, text: str, context: ExtractionContext) -> List[ExtractedDate]:
        """
        Extract promise dates from text.

        Args:
            text: The input text to analyze
            context: Reference date and history mode of this call

        Returns:
            Candidates ordered by position. Never raises for any text.
        """
        if not text or not text.strip():
            return []

        candidates = []
        for rule in self._registry:
            if rule.node.applies(context):
                candidates.extend(self._apply(rule, text, context))

        logger.debug(f"{len(candidates)} raw candidates in '{text}'")
        return reconcile(candidates, text)

    def _apply(self, rule: Rule, text: str, context: ExtractionContext) -> List[ExtractedDate]:
        candidates = []
        for match in rule.regex.finditer(text):
            try:
                candidate = rule.node.resolve(match, context)
            except Exception:
                logger.warning(
                    f"Rule '{rule.name}' failed on '{match.group()}' at {match.start()}",
                    exc_info=True,
                )
                continue

            if candidate is None:
                if rule.node.expects_value and not match.group().lower().endswith("month"):
                    logger.warning(f"Promise '{match.group()}' is matched, but not resolved")
                continue

            logger.debug(f"Rule '{rule.name}' produced {candidate!r}")
            candidates.append(candidate)
        return candidates
