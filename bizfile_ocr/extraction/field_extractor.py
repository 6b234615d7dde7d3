"""Label-based field extraction for BizFile company extracts.

Each company attribute is captured from the recognized document text
between its label and the next known label (or the end of the text).
Patterns are plain data and can be overridden from a YAML file.
"""

import re
from dataclasses import dataclass
from pathlib import Path

import yaml

from bizfile_ocr.utils.logger import get_logger

from .text import normalize

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldPattern:
    """A labeled-field regex and the capture group holding the value."""

    pattern: str
    group: int = 1


DEFAULT_FIELD_PATTERNS: dict[str, FieldPattern] = {
    "company_name": FieldPattern(
        r"Name of Company\s*:\s*([\s\S]*?)(?=Former Name|UEN|$)"
    ),
    "uen": FieldPattern(r"UEN\s*:\s*(\w+)"),
    "incorporation_date": FieldPattern(r"Incorporation Date\s*:\s*(.*)"),
    # The type text sits between the label and its own colon.
    "company_type": FieldPattern(r"Company Type\s*([\s\S]*?)(?=\s*:|$)"),
    "financial_year_end": FieldPattern(r"FYE As At Date of Last AR\s*:\s*(.*)"),
    "registered_address": FieldPattern(
        r"Registered Office Address\s*:\s*([\s\S]*?)(?=Date of Address|$)"
    ),
    "business_activity_primary": FieldPattern(
        r"Primary Activity\s*:\s*([\s\S]*?)(?=Secondary Activity|$)"
    ),
    "business_activity_secondary": FieldPattern(
        r"Secondary Activity\s*:\s*([\s\S]*?)(?=Verify Document|$)"
    ),
}


def extract_field(content: str, pattern: str, group: int = 1) -> str:
    """Return the normalized capture group of a case-insensitive match.

    Args:
        content: Full recognized document text.
        pattern: Regular expression with at least ``group`` capture groups.
        group: Index of the capture group holding the value.

    Returns:
        Normalized captured text, or an empty string when nothing matches.
    """
    match = re.search(pattern, content or "", re.IGNORECASE)
    if match is None:
        return ""
    try:
        value = match.group(group)
    except IndexError:
        return ""
    return normalize(value)


def load_field_patterns(path: Path) -> dict[str, FieldPattern]:
    """Load field pattern overrides from YAML and merge them over the defaults.

    The file maps field names either to a pattern string or to a mapping
    with ``pattern`` and optional ``group`` keys.

    Args:
        path: Path to the YAML file.

    Returns:
        The merged field pattern table.

    Raises:
        ValueError: If an override is malformed or not a valid regex.
    """
    patterns = dict(DEFAULT_FIELD_PATTERNS)
    if not path.exists():
        logger.debug("No field pattern file at %s, using defaults", path)
        return patterns

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    applied = 0
    for name, definition in raw.items():
        if name not in DEFAULT_FIELD_PATTERNS:
            logger.warning("Ignoring pattern for unknown field '%s'", name)
            continue
        if isinstance(definition, str):
            override = FieldPattern(definition)
        elif isinstance(definition, dict) and "pattern" in definition:
            override = FieldPattern(
                definition["pattern"], int(definition.get("group", 1))
            )
        else:
            raise ValueError(f"Invalid pattern definition for field '{name}'")
        try:
            re.compile(override.pattern)
        except re.error as exc:
            raise ValueError(f"Invalid regex for field '{name}': {exc}") from exc
        patterns[name] = override
        applied += 1

    logger.info("Loaded %d field pattern overrides from %s", applied, path)
    return patterns


class FieldExtractor:
    """Extracts the scalar company fields from recognized text.

    Args:
        patterns: Field pattern table. Defaults to ``DEFAULT_FIELD_PATTERNS``.
    """

    def __init__(self, patterns: dict[str, FieldPattern] | None = None) -> None:
        self.patterns = dict(patterns or DEFAULT_FIELD_PATTERNS)

    def extract(self, content: str, field_name: str) -> str:
        """Extract a single named field, or ``""`` for unknown fields."""
        field_pattern = self.patterns.get(field_name)
        if field_pattern is None:
            return ""
        return extract_field(content, field_pattern.pattern, field_pattern.group)

    def extract_all(self, content: str) -> dict[str, str]:
        """Run every configured pattern once against the content.

        Args:
            content: Full recognized document text.

        Returns:
            Mapping of field name to extracted value.
        """
        values = {name: self.extract(content, name) for name in self.patterns}
        found = sum(1 for value in values.values() if value)
        logger.debug("Field extraction matched %d of %d fields", found, len(values))
        return values
