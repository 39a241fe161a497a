"""Custom exception hierarchy for the chunk gate."""


class ChunkGateError(Exception):
    """Base exception for all chunk gate errors."""


class PreconditionError(ChunkGateError):
    """A caller supplied an invalid argument or option."""


class FilteringCancelled(ChunkGateError):
    """Filtering was cancelled at a batch boundary."""


class CompletionError(ChunkGateError):
    """Error returned by a completion provider."""


class ConfigurationError(ChunkGateError):
    """Error in system configuration."""
