"""Configuration classes for bracket tree parsing.

This module provides immutable configuration objects controlling category
validation, nesting limits, metrics collection and output formatting.
"""

import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from bracket_tree.tokenization.scanner import is_bare

from .errors import ConfigValidationError

# Upper bound for max_depth; each nesting level costs one interpreter frame
MAX_SUPPORTED_DEPTH = 400

VALID_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LexicalCategory(Enum):
    """Closed vocabulary of recognized linguistic category tags."""

    NOUN = "N"
    NOUN_PHRASE = "NP"
    VERB = "V"
    VERB_PHRASE = "VP"
    DETERMINER = "Det"
    ADJECTIVE = "Adj"
    PREPOSITION = "P"
    PREPOSITIONAL_PHRASE = "PP"
    COMPLEMENTIZER = "C"
    COMPLEMENTIZER_PHRASE = "CP"
    SENTENCE = "S"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["LexicalCategory"]:
        """Look up a category by its tag, returning None when unrecognized."""
        try:
            return cls(tag)
        except ValueError:
            return None


DEFAULT_VOCABULARY: FrozenSet[str] = frozenset(
    category.value for category in LexicalCategory
)


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for parsing bracket notation into syntax trees.

    Free-form and validated categories share one code path: ``strict`` only
    decides whether category tokens are checked against ``vocabulary``.
    Thread-safe due to frozen dataclass implementation.
    """

    strict: bool = False
    vocabulary: FrozenSet[str] = DEFAULT_VOCABULARY
    max_depth: int = 256

    correlation_id: Optional[str] = None
    enable_metrics: bool = True
    logging_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if not isinstance(self.vocabulary, frozenset):
            object.__setattr__(self, "vocabulary", frozenset(self.vocabulary))
        if self.strict and not self.vocabulary:
            raise ConfigValidationError(
                "vocabulary cannot be empty in strict mode",
                field_name="vocabulary",
                suggestions=["Disable strict mode", "Use the default vocabulary"],
            )
        for tag in self.vocabulary:
            if not tag or not is_bare(tag):
                raise ConfigValidationError(
                    f"vocabulary entry {tag!r} is not a valid category token",
                    field_name="vocabulary",
                )
        if not (1 <= self.max_depth <= MAX_SUPPORTED_DEPTH):
            raise ConfigValidationError(
                f"max_depth must be between 1 and {MAX_SUPPORTED_DEPTH}",
                field_name="max_depth",
            )
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(VALID_LOGGING_LEVELS)}",
                field_name="logging_level",
            )

    def accepts_category(self, tag: str) -> bool:
        """Check whether a category tag is allowed under this configuration."""
        return not self.strict or tag in self.vocabulary

    @classmethod
    def free_form(cls) -> "ParserConfig":
        """Create configuration accepting any category token."""
        return cls()

    @classmethod
    def strict_categories(
        cls, vocabulary: Optional[FrozenSet[str]] = None
    ) -> "ParserConfig":
        """Create configuration rejecting categories outside the vocabulary."""
        return cls(strict=True, vocabulary=vocabulary or DEFAULT_VOCABULARY)

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig().override(strict=True, max_depth=64)
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, frozenset):
                value = sorted(value)
            result[f.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if "vocabulary" in values:
            values["vocabulary"] = frozenset(values["vocabulary"])
        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Configuration is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)


@dataclass(frozen=True)
class FormatConfig:
    """Configuration for dictionary and JSON output of syntax trees."""

    include_whitespace: bool = False
    include_positions: bool = False
    json_indent: Optional[int] = 2
    json_ensure_ascii: bool = False

    def __post_init__(self) -> None:
        """Validate format configuration."""
        if self.json_indent is not None and self.json_indent < 0:
            raise ConfigValidationError(
                "json_indent must be >= 0 or None", field_name="json_indent"
            )

    @classmethod
    def detailed(cls) -> "FormatConfig":
        """Create configuration including whitespace and source positions."""
        return cls(include_whitespace=True, include_positions=True)

    @classmethod
    def compact(cls) -> "FormatConfig":
        """Create configuration for single-line JSON."""
        return cls(json_indent=None)
