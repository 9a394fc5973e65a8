# src/classdebug/inspector/inspector.py
"""
Inspector
---------

Runs one inspection: opens the loading context, resolves the configured
class and writes the report for the configured member category line by
line to the report logger. Resolution failures end the run with a single
error record and no report.
"""

import logging
from typing import Optional

from classdebug.config.debug_config import DebugConfig
from classdebug.inspector.errors import ClassDebugError, MemberAccessError
from classdebug.inspector.members import header_lines, iter_members
from classdebug.inspector.resolver import loading_context
from classdebug.monitoring.error_logging import ErrorComponent, create_component_logger
from classdebug.utils.logger import get_report_logger

logger = logging.getLogger(__name__)


class Inspector:
    """
    Prints the declared members of one class.

    Attributes
    ----------
    config : DebugConfig
        Options of the run.
    report : logging.Logger
        Receives the report lines and the error records.
    """

    def __init__(self, config: DebugConfig, report_logger: Optional[logging.Logger] = None) -> None:
        self.config = config
        self.report = report_logger or get_report_logger(config.log_level, config.log_file)
        self.resolver_errors = create_component_logger(ErrorComponent.RESOLVER, base_logger=self.report)
        self.member_errors = create_component_logger(ErrorComponent.ENUMERATOR, base_logger=self.report)

    def _on_member_error(self, name: str, error: MemberAccessError) -> None:
        self.member_errors.log_error(
            f"Could not inspect '{name}'",
            exception=error,
            context={"class": self.config.class_name, "member": name},
            severity="error",
        )

    def run(self) -> Optional[int]:
        """
        Produce the report.

        Returns:
            Optional[int]: Number of members reported, or None when the class
            could not be resolved.
        """
        config = self.config
        try:
            with loading_context(config.external_unit) as resolver:
                cls = resolver.resolve(config.class_name)

                for line in header_lines(config.target, config.class_name):
                    self.report.info(line)

                reported = 0
                for descriptor in iter_members(cls, config.target, on_error=self._on_member_error):
                    for line in descriptor.lines():
                        self.report.info(line)
                    reported += 1
        except ClassDebugError as e:
            self.resolver_errors.log_error(str(e), exception=e, severity="error")
            return None

        logger.debug(
            f"Reported {reported} {config.target.value.lower()} of '{config.class_name}', "
            f"skipped {self.member_errors.error_count}"
        )
        return reported
