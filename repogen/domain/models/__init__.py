from .manifest import FileSpec, Manifest
from .generation_order import GenerationOrder, UnresolvedDependency
from .project_spec import ProjectSpec
from .provider_result import ProviderResult
from .run_result import ErrorKind, RunResult, RunStatus

__all__ = [
    "FileSpec",
    "Manifest",
    "GenerationOrder",
    "UnresolvedDependency",
    "ProjectSpec",
    "ProviderResult",
    "ErrorKind",
    "RunResult",
    "RunStatus",
]
