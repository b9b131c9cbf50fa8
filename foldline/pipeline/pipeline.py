"""Top-level pipeline orchestration.

Parse → Profile
"""

import logging
from pathlib import Path

from foldline.config import PatternSettings, PipelineSettings, get_settings
from foldline.models.profile import ProfileResult, SelectorProfile
from foldline.models.stylesheet import ParsedStylesheet
from foldline.pipeline.parse import parse_file
from foldline.pipeline.patterns import Pattern, parse_patterns_file
from foldline.pipeline.profile import build_selector_profile

logger = logging.getLogger(__name__)


def resolve_patterns(settings: PatternSettings) -> tuple[list[Pattern], list[Pattern]]:
    """Combine configured patterns with those from the patterns file.

    Returns:
        Tuple of (force_include, force_exclude)
    """
    force_include = list(settings.force_include)
    force_exclude = list(settings.force_exclude)

    if settings.file is not None:
        from_file = parse_patterns_file(settings.file)
        force_include.extend(from_file["force_include"])
        force_exclude.extend(from_file["force_exclude"])
        logger.info(
            "Loaded %d force include and %d force exclude pattern(s) from %s",
            len(from_file["force_include"]),
            len(from_file["force_exclude"]),
            settings.file,
        )

    return force_include, force_exclude


def _run_parse_stage(target_path: Path) -> ParsedStylesheet:
    logger.info("Stage 1/2: Parsing...")
    stylesheet = parse_file(target_path)
    logger.info(
        "Parse complete: %d rule(s), %d selector(s)",
        len(stylesheet.rules),
        stylesheet.selector_count,
    )
    return stylesheet


def _run_profile_stage(stylesheet: ParsedStylesheet, settings: PipelineSettings) -> SelectorProfile:
    logger.info("Stage 2/2: Building selector profile...")
    force_include, force_exclude = resolve_patterns(settings.patterns)
    profile = build_selector_profile(stylesheet, force_include, force_exclude)
    logger.info(
        "Profile complete: %d to test, %d kept, %d dropped, %d rule(s) skipped",
        profile.testable_count,
        len(profile.force_kept),
        len(profile.force_dropped),
        profile.skipped_rules,
    )
    return profile


def run_pipeline(target_path: Path, settings: PipelineSettings | None = None) -> ProfileResult:
    """Run the full pipeline on a stylesheet file.

    Args:
        target_path: Path to the stylesheet
        settings: Pipeline settings (uses the global settings if None)

    Returns:
        ProfileResult with the parsed stylesheet and its selector profile
    """
    if settings is None:
        settings = get_settings()

    logger.info(f"Starting pipeline for: {target_path}")
    stylesheet = _run_parse_stage(target_path)
    profile = _run_profile_stage(stylesheet, settings)
    return ProfileResult(stylesheet=stylesheet, profile=profile)
