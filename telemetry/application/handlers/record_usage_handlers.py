"""
Telemetry handlers.

Handlers validate the event and pass it to the sink. They never touch the
license store.
"""
from core.application.validation import require_fields
from core.domain.clock import Clock, utcnow
from telemetry.application.commands.record_usage import (
    RecordPluginUseCommand,
    RecordSessionCommand,
)
from telemetry.ports.telemetry_sink import TelemetrySink


class RecordSessionHandler:
    """Handler for RecordSessionCommand."""

    def __init__(self, sink: TelemetrySink, clock: Clock = utcnow):
        self.sink = sink
        self.clock = clock

    def handle(self, command: RecordSessionCommand) -> bool:
        """
        Returns:
            True if the sink accepted the event

        Raises:
            MissingFieldsError: If email is absent
        """
        require_fields(email=command.email)
        return self.sink.record_session(
            command.email.strip(), command.device_id or None, self.clock()
        )


class RecordPluginUseHandler:
    """Handler for RecordPluginUseCommand."""

    def __init__(self, sink: TelemetrySink, clock: Clock = utcnow):
        self.sink = sink
        self.clock = clock

    def handle(self, command: RecordPluginUseCommand) -> bool:
        """
        Returns:
            True if the sink accepted the event

        Raises:
            MissingFieldsError: If email or plugin is absent
        """
        require_fields(email=command.email, plugin=command.plugin)
        return self.sink.record_plugin_use(
            command.email.strip(),
            command.plugin.strip(),
            command.device_id or None,
            self.clock(),
        )
