"""Standard logging tags for consistent log filtering.

Usage:
    from core.logging.tags import TAG_PERF, TAG_ANIM
    logger.info(f"{TAG_PERF} {TAG_ANIM} Operation took {elapsed:.2f}ms")
"""

TAG_PERF = "[PERF]"
"""Performance metrics."""

TAG_ANIM = "[ANIM]"
"""Animation manager, groups and view effects."""

TAG_IO = "[IO]"
"""File copies, downloads and image encoding."""

TAG_THREADING = "[THREADING]"
"""IO pool and UI-thread dispatch."""

TAG_FALLBACK = "[FALLBACK]"
"""Fallback operations when primary path fails."""
