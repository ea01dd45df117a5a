"""Protocol buffer and gRPC bindings for the language detection service."""

from ld_proto.pb import language_detection_pb2, language_detection_pb2_grpc

__all__ = ["language_detection_pb2", "language_detection_pb2_grpc"]
