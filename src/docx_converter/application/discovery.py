"""Tree discovery, exclusion rules, and output-path mirroring."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from docx_converter.application.results import (
    DiscoveryErrorRecord,
    DiscoveryResult,
    WorkItem,
)
from docx_converter.errors import DiscoveryError
from docx_converter.schemas import BatchConfig
from docx_converter.types import ExclusionPredicate, ReadmeMatch

logger = logging.getLogger(__name__)

README_STEM = "readme"


def readme_rule(
    source_extension: str,
    match: ReadmeMatch = "filename",
    nested: bool = False,
) -> ExclusionPredicate:
    """Build the README skip rule.

    Parameters
    ----------
    source_extension : str
        Source suffix, e.g. ``".md"``.
    match : {"filename", "stem"}, default="filename"
        ``"filename"`` compares the full name case-insensitively against
        ``README<source_extension>``; ``"stem"`` compares only the stem.
    nested : bool, default=False
        Apply the rule at every depth instead of only at the input root.

    Returns
    -------
    ExclusionPredicate
        Predicate over paths relative to the input root.
    """
    expected_name = f"{README_STEM}{source_extension}".lower()

    def _is_readme(relative: Path) -> bool:
        if not nested and len(relative.parts) != 1:
            return False
        if match == "stem":
            return relative.name[: -len(source_extension)].lower() == README_STEM
        return relative.name.lower() == expected_name

    return _is_readme


def pattern_rule(patterns: Iterable[str]) -> ExclusionPredicate:
    """Exclude paths whose POSIX relative path or basename matches a glob."""
    compiled = tuple(patterns)

    def _matches(relative: Path) -> bool:
        posix = relative.as_posix()
        return any(
            fnmatch.fnmatchcase(posix, pattern)
            or fnmatch.fnmatchcase(relative.name, pattern)
            for pattern in compiled
        )

    return _matches


def hidden_rule(relative: Path) -> bool:
    """Exclude any path with a dot-prefixed component."""
    return any(part.startswith(".") for part in relative.parts)


def build_exclusion_predicate(
    config: BatchConfig,
    extra_rules: Iterable[ExclusionPredicate] = (),
) -> ExclusionPredicate:
    """Combine the configured rules into one predicate.

    The root README rule is always included regardless of configuration.
    """
    rules: list[ExclusionPredicate] = [
        readme_rule(
            config.source_extension,
            match=config.readme_match,
            nested=config.exclude_nested_readmes,
        )
    ]
    if config.exclude_patterns:
        rules.append(pattern_rule(config.exclude_patterns))
    if config.skip_hidden:
        rules.append(hidden_rule)
    rules.extend(extra_rules)

    def _excluded(relative: Path) -> bool:
        return any(rule(relative) for rule in rules)

    return _excluded


def mirror_destination(
    source_path: Path,
    input_root: Path,
    output_root: Path,
    target_extension: str,
) -> Path:
    """Map a source file to its mirrored destination under ``output_root``.

    Raises
    ------
    DiscoveryError
        If the source is not under ``input_root`` or the destination would
        not be a strict descendant of ``output_root``.
    """
    try:
        relative = source_path.relative_to(input_root)
    except ValueError as exc:
        raise DiscoveryError(f"{source_path} is not under {input_root}") from exc
    if not relative.parts or ".." in relative.parts:
        raise DiscoveryError(f"refusing to mirror {source_path}: unsafe relative path")

    destination = Path(
        os.path.normpath(output_root / relative.with_suffix(target_extension))
    )
    if destination == output_root or not destination.is_relative_to(output_root):
        raise DiscoveryError(f"destination {destination} escapes {output_root}")
    return destination


def discover_work_items(
    config: BatchConfig,
    extra_rules: Iterable[ExclusionPredicate] = (),
) -> DiscoveryResult:
    """Walk the input root and build one work item per eligible document.

    Traversal order follows ``os.walk`` and is not deterministic across
    platforms or filesystems; callers must treat the result as a set.
    Symlinked directories are not followed. Unreadable directories are
    recorded as discovery errors and the walk continues with their siblings.
    """
    input_root = config.input_root
    output_root = config.output_root
    extension = config.source_extension
    excluded = build_exclusion_predicate(config, extra_rules)

    items: list[WorkItem] = []
    errors: list[DiscoveryErrorRecord] = []

    def _on_walk_error(exc: OSError) -> None:
        path = Path(exc.filename) if exc.filename else input_root
        logger.warning("cannot read directory %s: %s", path, exc.strerror or exc)
        errors.append(
            DiscoveryErrorRecord(path=path, diagnostic=f"cannot read directory: {exc}")
        )

    for dirpath, dirnames, filenames in os.walk(input_root, onerror=_on_walk_error):
        current = Path(dirpath)
        # Prune in place so os.walk never descends into these.
        dirnames[:] = [
            name
            for name in dirnames
            if (current / name) != output_root
            and not (config.skip_hidden and name.startswith("."))
        ]
        for filename in filenames:
            if not filename.endswith(extension) or len(filename) == len(extension):
                continue
            source_path = current / filename
            relative = source_path.relative_to(input_root)
            if excluded(relative):
                logger.debug("skipping excluded file %s", relative)
                continue
            try:
                dest_path = mirror_destination(
                    source_path, input_root, output_root, config.target_extension
                )
            except DiscoveryError as exc:
                logger.warning("%s", exc)
                errors.append(DiscoveryErrorRecord(path=source_path, diagnostic=str(exc)))
                continue
            items.append(WorkItem(source_path=source_path, dest_path=dest_path))

    logger.debug("discovered %d work item(s) under %s", len(items), input_root)
    return DiscoveryResult(items=tuple(items), errors=tuple(errors))
