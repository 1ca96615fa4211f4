"""Rule host contract and the file-backed chain snapshot host."""

from repoenforcer.host.protocol import (
    PROJECT_EXPRESSION,
    ArtifactNotFoundError,
    ArtifactResolutionError,
    ExpressionEvaluationError,
    HostError,
    ModelParseError,
    RuleHelper,
)
from repoenforcer.host.snapshot import ChainDocumentError, SnapshotRuleHelper, load_chain_document

__all__ = [
    "PROJECT_EXPRESSION",
    "ArtifactNotFoundError",
    "ArtifactResolutionError",
    "ChainDocumentError",
    "ExpressionEvaluationError",
    "HostError",
    "ModelParseError",
    "RuleHelper",
    "SnapshotRuleHelper",
    "load_chain_document",
]
