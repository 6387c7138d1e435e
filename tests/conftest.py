import pytest

from promptsmith.obs.telemetry import TelemetryRecorder
from promptsmith.pipeline.orchestrator import PromptOrchestrator


@pytest.fixture
def telemetry() -> TelemetryRecorder:
    return TelemetryRecorder()


@pytest.fixture
def orchestrator(telemetry: TelemetryRecorder):
    with PromptOrchestrator(telemetry=telemetry) as instance:
        yield instance
