"""converse-client -- SDK for the sidecar conversation API over gRPC."""

__version__ = '0.1.0'
