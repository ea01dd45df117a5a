"""Protocol buffer messages for ``ld_proto/protos/language_detection.proto``.

``grpcio-tools`` compiles the ``.proto`` file on first import, so the
``.proto`` file is the only definition of the schema.
"""

import grpc

PROTO_FILE_NAME = "ld_proto/protos/language_detection.proto"

_protos = grpc.protos(PROTO_FILE_NAME)

DESCRIPTOR = _protos.DESCRIPTOR
PACKAGE = DESCRIPTOR.package
SERVICE_NAME = DESCRIPTOR.services_by_name["LanguageDetectionService"].full_name

DetectLanguageRequest = _protos.DetectLanguageRequest
DetectLanguageResponse = _protos.DetectLanguageResponse
LanguageAlternative = _protos.LanguageAlternative
ProcessingMetadata = _protos.ProcessingMetadata

__all__ = [
    "DESCRIPTOR",
    "DetectLanguageRequest",
    "DetectLanguageResponse",
    "LanguageAlternative",
    "ProcessingMetadata",
]
