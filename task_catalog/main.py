"""Console entry point: settings, logging, catalog and prompt loop."""

import logging
from typing import Optional

from .cli.console import TaskConsole
from .config import Settings
from .deps import get_settings
from .services.task_catalog import initialize_task_catalog
from .utils.logging import log_shutdown_info, log_startup_info, setup_logging

logger = logging.getLogger(__name__)


def create_console(settings: Optional[Settings] = None) -> TaskConsole:
    """Create a console wired to a fresh global task catalog.

    Args:
        settings: Application settings; the cached settings when omitted

    Returns:
        Ready-to-run console
    """
    settings = settings or get_settings()

    setup_logging(settings)
    log_startup_info(settings)

    catalog = initialize_task_catalog()
    return TaskConsole(catalog, settings)


def main() -> None:
    """Run the interactive task console."""
    settings = get_settings()
    console = create_console(settings)

    try:
        console.run()
    except KeyboardInterrupt:
        logger.info("Console stopped by user")
    finally:
        log_shutdown_info(settings)


if __name__ == "__main__":
    main()
