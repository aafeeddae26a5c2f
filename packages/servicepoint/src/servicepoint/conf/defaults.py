"""Default configuration values for servicepoint."""

DEFAULTS: dict[str, object] = {
    # Last add wins on an exact-key collision; False raises instead.
    "ALLOW_OVERRIDE": True,
    # Raise on ineligible tagged members instead of logging and skipping them.
    "STRICT_ACCESSORS": False,
    # Wrap every routed call in an OpenTelemetry span.
    "TRACE_ROUTING": True,
    # Modules imported by ServicePointApp.autodiscover() when none are given.
    "DISCOVERY_MODULES": (),
}
