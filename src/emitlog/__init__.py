"""
emitlog - structured event logging shipped to Seq in size-bounded batches.

Events carry a message template and named, pre-serialized JSON properties.
A collector formats each event, groups the fragments into request bodies
that respect a per-event and a per-batch byte budget, and POSTs them.

Example:
    from emitlog import Level, SeqCollector, capture

    collector = SeqCollector.local()
    collector.dispatch([capture(Level.WARN, "The number is {}", number=42)])
"""

from ._version import __version__
from .collectors import Collector, SeqCollector, SeqCollectorConfig
from .core.errors import ConfigurationError, EmitlogError, TransportError
from .core.events import Event, capture_property_value
from .core.levels import Level, severity_name
from .core.settings import Settings
from .core.templates import build_template, capture
from .metrics.metrics import MetricsCollector

__all__ = [
    "__version__",
    # Events
    "Event",
    "Level",
    "capture",
    "capture_property_value",
    "build_template",
    "severity_name",
    # Collectors
    "Collector",
    "SeqCollector",
    "SeqCollectorConfig",
    "MetricsCollector",
    # Configuration and errors
    "Settings",
    "EmitlogError",
    "ConfigurationError",
    "TransportError",
]
