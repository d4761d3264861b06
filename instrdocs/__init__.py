"""Static metadata extraction and documentation publishing for instrumentation modules."""

__version__ = "0.1.0"
