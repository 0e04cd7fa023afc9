"""
Graphene CLI Core Module
========================

Batch pipeline components.

Submodules:
- models: Option enums, InvocationRequest, engine outcome models
- errors: Error types
- inputs: Input resolution (TEXT/FILE/WIKI)
- engine: Analysis engine contract and Graphene REST client
- router: Per-item dispatch of the selected analysis
- naming: Output names of batch items
"""

from graphene_cli.core.engine import AnalysisEngine, EngineConfig, GrapheneClient
from graphene_cli.core.errors import (
    AnalysisEngineError,
    ConfigurationError,
    FormatSerializationError,
    GrapheneCLIError,
    InputReadError,
    OutputWriteError,
    UnsupportedInputModeError,
)
from graphene_cli.core.inputs import read_file, resolve_inputs
from graphene_cli.core.models import (
    ContentKind,
    CoreferenceContent,
    CorefFormat,
    InputSource,
    InvocationRequest,
    NamedResult,
    Operation,
    OutputSource,
    REFormat,
    SimFormat,
    SimplificationContent,
)
from graphene_cli.core.naming import name_results
from graphene_cli.core.router import OperationRouter

__all__ = [
    # Models
    "Operation",
    "InputSource",
    "OutputSource",
    "CorefFormat",
    "SimFormat",
    "REFormat",
    "ContentKind",
    "InvocationRequest",
    "CoreferenceContent",
    "SimplificationContent",
    "NamedResult",
    # Errors
    "GrapheneCLIError",
    "ConfigurationError",
    "UnsupportedInputModeError",
    "InputReadError",
    "AnalysisEngineError",
    "FormatSerializationError",
    "OutputWriteError",
    # Pipeline
    "resolve_inputs",
    "read_file",
    "AnalysisEngine",
    "EngineConfig",
    "GrapheneClient",
    "OperationRouter",
    "name_results",
]
