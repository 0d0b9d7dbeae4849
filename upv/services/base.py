"""Base service class.
"""

from upv.core.config import Settings, settings as default_settings
from upv.services.runner import CommandRunner
from upv.utils.logger import get_logger


class BaseService:
    """Base class for services that drive external Windows utilities."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        settings: Settings | None = None,
    ):
        """Initialize service.

        Args:
            runner: Command runner. Tests pass a fake one; by default a
                    real subprocess runner is created.
            settings: Application settings, the global instance by default.
        """
        self.runner = runner or CommandRunner()
        self.logger = get_logger(self.__class__.__name__)
        self.settings = settings or default_settings
