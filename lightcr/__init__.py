from .core.resource import ResourceDescriptor, CrBuilder, custom_resource
from .core.request import RequestSpec, RawApi, prepare_request
from .core.params import PostParams, PatchParams, ListParams, DeleteParams
from .core.api import Api, AsyncApi
from .core.exceptions import ApiError, ResourceDefinitionError, LoadResourceError
from .generic_resource import Generic
from .types import PatchType, CascadeType, FieldValidation

__all__ = [
    "ResourceDescriptor",
    "CrBuilder",
    "custom_resource",
    "RequestSpec",
    "RawApi",
    "prepare_request",
    "PostParams",
    "PatchParams",
    "ListParams",
    "DeleteParams",
    "Api",
    "AsyncApi",
    "ApiError",
    "ResourceDefinitionError",
    "LoadResourceError",
    "Generic",
    "PatchType",
    "CascadeType",
    "FieldValidation",
]
