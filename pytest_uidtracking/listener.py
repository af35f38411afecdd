import logging
from pathlib import Path
from typing import List, Optional

from pytest_uidtracking.config import get_settings
from pytest_uidtracking.output import get_output_file, write_unique_ids
from pytest_uidtracking.types import CaseIdentifier, ConfigurationParameters, Outcome

logger = logging.getLogger(__name__)


class UniqueIdTrackingListener:
    """Tracks the unique IDs of every executed test and writes them to a file.

    Tests are tracked regardless of their outcome. Once the run finishes the IDs
    are written one per line, UTF-8 encoded, so the same set of tests can be run
    again without another discovery pass.

    Hooks are called in order of execution, once per run, from a single thread.
    """

    def __init__(self) -> None:
        self.enabled: bool = False
        self.unique_ids: List[str] = []

    def current_working_dir(self) -> Path:
        return Path.cwd()

    def run_started(self, parameters: ConfigurationParameters) -> None:
        self.enabled = get_settings(parameters).enabled

    def case_finished(self, identifier: CaseIdentifier, outcome: Outcome) -> None:
        if self.enabled and identifier.is_test:
            self.unique_ids.append(identifier.unique_id)

    def run_finished(self, parameters: ConfigurationParameters) -> Optional[Path]:
        """Return the written file, or ``None`` when nothing was written."""
        if not self.enabled:
            return None

        try:
            output_file = get_output_file(
                get_settings(parameters), self.current_working_dir()
            )
        except (OSError, ValueError):
            # Abort since we cannot generate the file.
            logger.exception("Failed to create output file")
            return None

        logger.debug("Writing unique IDs to output file %s", output_file.absolute())
        try:
            write_unique_ids(output_file, self.unique_ids)
        except (OSError, ValueError):
            logger.exception(
                "Failed to write unique IDs to output file %s", output_file.absolute()
            )
            return None
        return output_file
