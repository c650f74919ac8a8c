"""Host runtime integration.

The host loads the plugin once per session. Each load runs the install
pass first and then hands control to the real hook set.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from gyoshu_installer.config import InstallerConfig
from gyoshu_installer.orchestrator import run_auto_install
from gyoshu_installer.protocols import HookFactory
from gyoshu_installer.types import RunSummary

logger = logging.getLogger(__name__)


def report_summary(summary: RunSummary, config: InstallerConfig) -> None:
    """Log the outcome of an install run."""
    if summary.installed > 0:
        logger.info("Gyoshu: Installed %d files to %s", summary.installed, config.target_root)

    if summary.errors:
        logger.warning("Gyoshu: Some files failed to install:")
        for error in summary.errors:
            logger.warning("  - %s", error)

    for warning in summary.warnings:
        logger.warning("Gyoshu: %s", warning)


def create_plugin(
    hooks: HookFactory,
    config: InstallerConfig | None = None,
) -> Callable[[Any], Awaitable[Any]]:
    """Wrap a hook factory so every load installs assets first.

    Args:
        hooks: Builds the host hook set from the load context.
        config: Installer locations. Defaults are resolved at load time.

    Returns:
        Async plugin entry point for the host runtime.
    """

    async def plugin(ctx: Any) -> Any:
        run_config = config or InstallerConfig.create_default()
        try:
            summary = run_auto_install(run_config)
        except Exception:
            logger.exception("Gyoshu: install aborted")
            raise
        report_summary(summary, run_config)

        result = hooks(ctx)
        if inspect.isawaitable(result):
            result = await result
        return result

    return plugin
