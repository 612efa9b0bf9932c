"""Built-in connection-provider operations resolved by registered clients."""

from __future__ import annotations

from designer_connectors.schemas import OperationInfo


def _operation(connector_id: str, operation_id: str) -> OperationInfo:
    return OperationInfo(connector_id=connector_id, operation_id=operation_id)


CLIENT_SUPPORTED_OPERATIONS: tuple[OperationInfo, ...] = (
    _operation("connectionProviders/localWorkflowOperation", "invokeWorkflow"),
    _operation("connectionProviders/xmlOperations", "xmlValidation"),
    _operation("connectionProviders/xmlOperations", "xmlTransform"),
    _operation("connectionProviders/liquidOperations", "liquidJsonToJson"),
    _operation("connectionProviders/liquidOperations", "liquidJsonToText"),
    _operation("connectionProviders/liquidOperations", "liquidXmlToJson"),
    _operation("connectionProviders/liquidOperations", "liquidXmlToText"),
    _operation("connectionProviders/flatFileOperations", "flatFileDecoding"),
    _operation("connectionProviders/flatFileOperations", "flatFileEncoding"),
    _operation("connectionProviders/swiftOperations", "SwiftDecode"),
    _operation("connectionProviders/swiftOperations", "SwiftEncode"),
)

__all__ = ["CLIENT_SUPPORTED_OPERATIONS"]
