"""Core parser API for bracket notation syntax trees.

Progressive disclosure: module-level :func:`parse` for the common case,
:class:`BracketTreeParser` for reuse, statistics and a non-raising
:meth:`BracketTreeParser.try_parse` that reports failures as diagnostics.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union, cast

import psutil

from bracket_tree.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseError,
    ParseErrorKind,
    ParserConfig,
    PerformanceMetrics,
    get_logger,
)
from bracket_tree.tokenization import Scanner
from bracket_tree.tree import SyntaxTree, TreeBuilder

PREVIEW_LENGTH = 60  # Max length for content preview in logs
MS_PER_SECOND = 1000


def parse(text: str, config: Optional[ParserConfig] = None) -> SyntaxTree:
    """Parse bracket notation into a positioned syntax tree.

    The whole input must be a single root node surrounded by optional
    whitespace.

    Args:
        text: Bracket notation source
        config: Parser configuration (defaults to free-form categories)

    Returns:
        SyntaxTree with layout coordinates on every node

    Raises:
        ParseError: On the first syntax problem; no partial tree is returned

    Examples:
        >>> tree = parse("[S [NP Ash][VP caught]]")
        >>> tree.root.x
        0.5
        >>> [str(node.category) for node in tree.iter()]
        ['S', 'NP', 'VP']
    """
    remaining, tree = parse_prefix(text, config)
    _require_consumed(text, remaining)
    return tree


def parse_prefix(
    text: str, config: Optional[ParserConfig] = None
) -> Tuple[str, SyntaxTree]:
    """Parse one root node from the start of ``text``.

    Returns:
        The unconsumed remainder and the positioned tree
    """
    config = config or ParserConfig()
    logger = get_logger(__name__, config.correlation_id, "parse")
    logger.debug(
        "Starting parse",
        extra={"content_length": len(text), "preview": _preview(text)},
    )

    remaining, root = TreeBuilder(config).build(text)
    return remaining, SyntaxTree(root, correlation_id=config.correlation_id)


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None,
) -> SyntaxTree:
    """Parse bracket notation stored in a file.

    Newlines are read untranslated so that round-trip formatting reproduces
    the file contents exactly.
    """
    path_obj = Path(file_path)
    with path_obj.open(encoding=encoding, newline="") as file:
        content = file.read()
    return parse(content, config)


@dataclass
class ParseResult:
    """Outcome of a non-raising parse.

    ``tree`` is None whenever ``success`` is False; failures never carry a
    partial tree.
    """

    tree: Optional[SyntaxTree] = None
    success: bool = True
    error: Optional[ParseError] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def to_dict(self) -> Dict[str, Any]:
        """Summarize the result without the tree itself."""
        result: Dict[str, Any] = {
            "success": self.success,
            "processing_time_ms": self.performance.processing_time_ms,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }
        if self.tree is not None:
            result.update(
                {
                    "node_count": self.performance.node_count,
                    "leaf_count": self.performance.leaf_count,
                    "max_depth": self.performance.max_depth,
                }
            )
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result


class BracketTreeParser:
    """Configured, reusable parser with usage statistics.

    Examples:
        >>> parser = BracketTreeParser(ParserConfig.strict_categories())
        >>> parser.parse("[NP [Det the][N Mew]]").leaf_count
        2
        >>> parser.try_parse("[XP word]").error.kind
        <ParseErrorKind.INVALID_CATEGORY: 'invalid_category'>
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "bracket_tree_parser")
        self._builder = TreeBuilder(self.config)

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

        self.logger.info(
            "BracketTreeParser initialized",
            extra={"strict": self.config.strict, "max_depth": self.config.max_depth},
        )

    def parse(self, text: str) -> SyntaxTree:
        """Parse ``text`` with this parser's configuration.

        Raises:
            ParseError: On the first syntax problem
        """
        result = self.try_parse(text)
        if result.error is not None:
            raise result.error
        return cast(SyntaxTree, result.tree)

    def try_parse(self, text: str) -> ParseResult:
        """Parse ``text`` and report failure in the result instead of raising."""
        start_time = time.perf_counter()
        process = psutil.Process() if self.config.enable_metrics else None
        rss_before = process.memory_info().rss if process else 0

        result = ParseResult(correlation_id=self.config.correlation_id)
        result.performance.characters_processed = len(text)

        try:
            remaining, root = self._builder.build(text)
            _require_consumed(text, remaining)
            tree = SyntaxTree(root, correlation_id=self.config.correlation_id)
        except ParseError as e:
            result.success = False
            result.error = e
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                e.message,
                "tree_builder",
                position=e.position.to_dict(),
                details={"kind": e.kind.value},
            )
            self.logger.warning(
                "Parse failed",
                extra={"kind": e.kind.value, "offset": e.position.offset},
            )
        else:
            result.tree = tree
            result.performance.node_count = tree.node_count
            result.performance.leaf_count = tree.leaf_count
            result.performance.max_depth = tree.depth

        if process:
            result.performance.memory_used_bytes = max(
                0, process.memory_info().rss - rss_before
            )
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        result.performance.processing_time_ms = processing_time

        self._parse_count += 1
        self._total_processing_time += processing_time
        if result.success:
            self._successful_parses += 1

        self.logger.info(
            "Parse completed",
            extra={
                "success": result.success,
                "processing_time_ms": processing_time,
                "total_parses": self._parse_count,
            },
        )
        return result

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the configuration used for subsequent parses."""
        self.config = config
        self._builder = TreeBuilder(config)
        self.logger = get_logger(__name__, config.correlation_id, "bracket_tree_parser")
        self.logger.info("Parser reconfigured", extra={"strict": config.strict})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.config.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self.logger.info("Parser statistics reset")


def _preview(text: str) -> str:
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def _require_consumed(text: str, remaining: str) -> None:
    if remaining:
        raise ParseError(
            ParseErrorKind.UNCONSUMED_TRAILING_CONTENT,
            f"unexpected content after the root node: {_preview(remaining)!r}",
            Scanner(text).position_at(len(text) - len(remaining)),
        )
