"""gRPC language detection service, client and integration adapter."""

__version__ = "1.0.0"
