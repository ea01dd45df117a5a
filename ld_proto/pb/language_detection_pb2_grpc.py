"""Client and server classes for the ``LanguageDetectionService`` gRPC service."""

import grpc

from ld_proto.pb import language_detection_pb2

DETECT_LANGUAGE_METHOD = f"/{language_detection_pb2.SERVICE_NAME}/DetectLanguage"

_services = grpc.services(language_detection_pb2.PROTO_FILE_NAME)

LanguageDetectionServiceStub = _services.LanguageDetectionServiceStub
LanguageDetectionServiceServicer = _services.LanguageDetectionServiceServicer
add_LanguageDetectionServiceServicer_to_server = (
    _services.add_LanguageDetectionServiceServicer_to_server
)


def add_raw_LanguageDetectionServiceServicer_to_server(servicer, server):
    """Register the servicer so that it receives undecoded request bytes.

    The servicer is responsible for decoding the request.
    """
    rpc_method_handlers = {
        "DetectLanguage": grpc.unary_unary_rpc_method_handler(
            servicer.DetectLanguage,
            request_deserializer=None,
            response_serializer=language_detection_pb2.DetectLanguageResponse.SerializeToString,
        ),
    }
    generic_handler = grpc.method_handlers_generic_handler(
        language_detection_pb2.SERVICE_NAME, rpc_method_handlers
    )
    server.add_generic_rpc_handlers((generic_handler,))
