from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

import pytest

from pytest_uidtracking.config import (
    DEFAULT_FILE_NAME,
    ENABLED_PROPERTY_NAME,
    OUTPUT_DIR_PROPERTY_NAME,
    OUTPUT_FILE_PROPERTY_NAME,
    PytestConfigurationParameters,
)
from pytest_uidtracking.listener import UniqueIdTrackingListener
from pytest_uidtracking.types import CaseIdentifier, ConfigurationParameters, Outcome

if TYPE_CHECKING:
    from _pytest.config import Config, PytestPluginManager  # pragma: no cover
    from _pytest.config.argparsing import Parser  # pragma: no cover
    from _pytest.reports import CollectReport, TestReport  # pragma: no cover
    from _pytest.terminal import TerminalReporter  # pragma: no cover
    from pytest import Session  # pragma: no cover


def pytest_addoption(parser: "Parser", pluginmanager: "PytestPluginManager") -> None:
    group = parser.getgroup("uidtracking", "unique test ID tracking")
    group.addoption(
        "--uid-tracking",
        dest=ENABLED_PROPERTY_NAME,
        action="store_true",
        default=None,
        help="write the unique IDs of all executed tests to a file",
    )
    group.addoption(
        "--uid-tracking-output-dir",
        dest=OUTPUT_DIR_PROPERTY_NAME,
        default=None,
        metavar="DIR",
        help="directory for the unique IDs file, relative to the working directory",
    )
    group.addoption(
        "--uid-tracking-output-file",
        dest=OUTPUT_FILE_PROPERTY_NAME,
        default=None,
        metavar="NAME",
        help=f"name of the unique IDs file (default: {DEFAULT_FILE_NAME})",
    )

    parser.addini(
        ENABLED_PROPERTY_NAME,
        help="write the unique IDs of all executed tests to a file",
    )
    parser.addini(
        OUTPUT_DIR_PROPERTY_NAME,
        help="directory for the unique IDs file",
    )
    parser.addini(
        OUTPUT_FILE_PROPERTY_NAME,
        help="name of the unique IDs file",
    )


def pytest_configure(config: "Config") -> None:
    # Workers forward their reports to the main node, which writes the file
    if hasattr(config, "workerinput"):
        return

    plugin = UniqueIdTrackingPlugin(
        parameters=PytestConfigurationParameters(config),
        listener=UniqueIdTrackingListener(),
    )
    config.pluginmanager.register(plugin, "uid_tracking_plugin")


class UniqueIdTrackingPlugin:
    def __init__(
        self,
        parameters: ConfigurationParameters,
        listener: UniqueIdTrackingListener,
    ) -> None:
        self.parameters = parameters
        self.listener = listener
        self.outcomes: Dict[str, Outcome] = {}
        self.output_file: Optional[Path] = None

    def pytest_sessionstart(self, session: "Session") -> None:
        self.listener.run_started(self.parameters)

    def pytest_collectreport(self, report: "CollectReport") -> None:
        outcome: Outcome = "error" if report.failed else report.outcome
        self.listener.case_finished(
            CaseIdentifier(unique_id=report.nodeid, is_test=False), outcome
        )

    def pytest_runtest_logreport(self, report: "TestReport") -> None:
        node_id = report.nodeid
        if report.when == "setup":
            self.outcomes[node_id] = "error" if report.failed else report.outcome
        elif report.when == "call":
            self.outcomes[node_id] = report.outcome
        elif report.when == "teardown":
            outcome = self.outcomes.pop(node_id, "passed")
            if report.failed and outcome != "failed":
                outcome = "error"
            self.listener.case_finished(
                CaseIdentifier(unique_id=node_id, is_test=True), outcome
            )
        else:
            # xdist reports a crashed worker's test once, with no teardown
            self.outcomes.pop(node_id, None)
            self.listener.case_finished(
                CaseIdentifier(unique_id=node_id, is_test=True), "failed"
            )

    def pytest_sessionfinish(self, session: "Session") -> None:
        self.output_file = self.listener.run_finished(self.parameters)

    def pytest_terminal_summary(self, terminalreporter: "TerminalReporter") -> None:
        if self.output_file is None:
            return
        terminalreporter.write_sep(
            "-", f"unique test IDs written to {self.output_file.absolute()}"
        )
        terminalreporter.write_line(
            f"Tests tracked: {len(self.listener.unique_ids)}"
        )
