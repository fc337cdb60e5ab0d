from coordmap.testing.utils import RecordingFactory, Signal, visited_keys

__all__ = ["RecordingFactory", "Signal", "visited_keys"]
