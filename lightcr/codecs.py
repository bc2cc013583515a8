from typing import Union, TextIO, List, Mapping

import yaml

from .generic_resource import Generic
from .core.exceptions import LoadResourceError, ResourceDefinitionError
from .core.resource import CrBuilder, ResourceDescriptor

REQUIRED_ATTR = ('apiVersion', 'kind')


def from_dict(d: dict) -> Generic:
    """Converts a kubernetes resource defined as python dict to a `Generic` object.
    Returns the object or raise a `LoadResourceError`.

    **parameters**

    * **d** - A dictionary representing a Kubernetes resource. Keys `apiVersion` and `kind` are
      always required.
    """
    if not isinstance(d, Mapping):
        raise LoadResourceError(f"Invalid resource definition, {d!r} is not a dict.")
    for attr in REQUIRED_ATTR:
        if attr not in d:
            raise LoadResourceError(f"Invalid resource definition, key '{attr}' missing.")
    return Generic.from_dict(dict(d))


def split_api_version(api_version: str):
    """Split `apiVersion` in group and version. The core group is returned as an empty string."""
    group, sep, version = api_version.rpartition("/")
    if not version or (sep and not group):
        raise LoadResourceError(f"Invalid apiVersion '{api_version}'")
    return group, version


def descriptor_for(obj: Mapping) -> ResourceDescriptor:
    """Build the `ResourceDescriptor` addressing `obj`, using its `apiVersion`, `kind` and
    `metadata.namespace` (when present). Raise `LoadResourceError` if the object can't be described.
    """
    obj = from_dict(obj)
    group, version = split_api_version(str(obj.apiVersion))
    metadata = obj.metadata or {}
    if not isinstance(metadata, Mapping):
        raise LoadResourceError("Invalid resource definition, 'metadata' is not a dict.")
    if not isinstance(obj.kind, str):
        raise LoadResourceError(f"Invalid resource definition, kind {obj.kind!r} is not a string.")
    try:
        return CrBuilder(obj.kind, group=group, version=version, namespace=metadata.get('namespace')).build()
    except ResourceDefinitionError as e:
        raise LoadResourceError(str(e)) from e


def load_all_yaml(stream: Union[str, TextIO]) -> List[Generic]:
    """Load kubernetes objects defined as YAML. Returns a list of `Generic` objects or raise a
    `LoadResourceError`. Empty YAML documents in the stream are skipped.

    **parameters**

    * **stream** - A file-like object or a string representing a yaml file.
    """
    return [from_dict(obj) for obj in yaml.safe_load_all(stream) if obj is not None]


def dump_all_yaml(resources: List[Mapping], stream: TextIO = None, indent=2):
    """Write kubernetes objects as YAML into an open file.

    **parameters**

    * **resources** - List of objects to write on the file
    * **stream** - File where to write the objects. When not set the content is returned
      as a string.
    * **indent** - Number of characters for indenting nested blocks.
    """
    res = [r.to_dict() if isinstance(r, Generic) else dict(r) for r in resources]
    return yaml.safe_dump_all(res, stream, indent=indent)
