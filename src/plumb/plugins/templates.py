"""Scaffolding template discovery inside a plugin."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TEMPLATES_DIRECTORY = "Templates"


class TemplatesDirectoryLocator:
    """Finds the template directories a plugin ships."""

    def locate(self, plugin_root: Path) -> list[Path]:
        """Return each sub-directory of ``<plugin_root>/Templates``, sorted by name."""
        templates_root = Path(plugin_root) / TEMPLATES_DIRECTORY
        if not templates_root.is_dir():
            return []
        found = sorted(p for p in templates_root.iterdir() if p.is_dir())
        logger.debug(f"Found {len(found)} template(s) in {templates_root}")
        return found
