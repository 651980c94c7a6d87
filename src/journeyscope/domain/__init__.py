"""Domain layer: journeys, events, telemetry values, ports, exceptions."""
