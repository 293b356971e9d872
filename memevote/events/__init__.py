"""Event sinks for MemeVote."""

from .sinks import CollectingSink, FanoutSink, LoggingSink, NullSink, QueueSink

__all__ = [
    "CollectingSink",
    "FanoutSink",
    "LoggingSink",
    "NullSink",
    "QueueSink",
]
