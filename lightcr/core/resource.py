from typing import NamedTuple, Optional, TYPE_CHECKING

from ..utils.text import pluralize, is_plural, is_pascal_case
from .exceptions import ResourceDefinitionError

if TYPE_CHECKING:
    import httpx
    from .api import Api


def make_api_version(group: str, version: str) -> str:
    return f"{group}/{version}" if group else version


class ResourceDescriptor(NamedTuple):
    """Identity of a resource type as seen by the API server.

    Instances are created with `custom_resource(kind)...build()` and never change afterwards.
    `api_version` and `plural` are derived once at build time.
    """
    kind: str
    group: str
    version: str
    api_version: str
    plural: str
    namespace: Optional[str] = None

    @property
    def namespaced(self) -> bool:
        return self.namespace is not None

    def within(self, namespace: Optional[str]) -> "ResourceDescriptor":
        """Return a copy of this descriptor scoped to `namespace` (cluster scoped when `None`)"""
        check_namespace(namespace)
        return self._replace(namespace=namespace)

    def to_api(self, client: "httpx.Client", response_type=None, **kwargs) -> "Api":
        """Bind this descriptor to an `httpx.Client`. See `lightcr.Api` for the accepted arguments."""
        from .api import Api
        return Api(self, client, response_type=response_type, **kwargs)


def check_namespace(namespace: Optional[str]):
    if namespace is not None and not namespace:
        raise ResourceDefinitionError("namespace must not be empty, use None for cluster scoped resources")


def check_kind(kind: str):
    if not kind:
        raise ResourceDefinitionError("kind must not be empty")
    if not is_pascal_case(kind):
        raise ResourceDefinitionError(f"kind '{kind}' must be written in PascalCase, e.g. 'CronTab'")
    if is_plural(kind):
        raise ResourceDefinitionError(f"kind '{kind}' must be singular")


class CrBuilder:
    """Collect the identity of a custom resource and build a `ResourceDescriptor`.

    Every setter returns a new builder, so a builder can be used as a template
    for several descriptors:

    ```python
    foos = custom_resource("Foo").group("clux.dev").version("v1")
    global_foos = foos.build()
    my_foos = foos.within("myns").build()
    ```

    **Parameters**

    * **kind** `str` - Singular PascalCase resource kind. Example: `CronTab`.
    * **group** `str` - *(optional)* API group. Use `""` for the core group.
    * **version** `str` - *(optional)* API version. Example: `v1`.
    * **namespace** `str` - *(optional)* Namespace of the resources. When not set, paths are cluster scoped.
    """
    __slots__ = ('_kind', '_group', '_version', '_namespace')

    def __init__(self, kind: str, group: str = None, version: str = None, namespace: str = None):
        check_kind(kind)
        self._kind = kind
        self._group = group
        self._version = version
        self._namespace = namespace

    def _copy(self, **changes) -> "CrBuilder":
        fields = dict(group=self._group, version=self._version, namespace=self._namespace)
        fields.update(changes)
        return CrBuilder(self._kind, **fields)

    def group(self, group: str) -> "CrBuilder":
        """Set the API group"""
        return self._copy(group=group)

    def version(self, version: str) -> "CrBuilder":
        """Set the API version"""
        return self._copy(version=version)

    def within(self, namespace: str) -> "CrBuilder":
        """Set the namespace"""
        return self._copy(namespace=namespace)

    def build(self) -> ResourceDescriptor:
        if self._version is None:
            raise ResourceDefinitionError(f"Resource {self._kind} must have a version")
        if self._group is None:
            raise ResourceDefinitionError(f"Resource {self._kind} must have a group")
        check_namespace(self._namespace)
        return ResourceDescriptor(
            kind=self._kind,
            group=self._group,
            version=self._version,
            api_version=make_api_version(self._group, self._version),
            plural=pluralize(self._kind),
            namespace=self._namespace,
        )

    def __repr__(self):
        return (f"CrBuilder(kind={self._kind!r}, group={self._group!r}, "
                f"version={self._version!r}, namespace={self._namespace!r})")


def custom_resource(kind: str) -> CrBuilder:
    """Start the definition of a resource of the given `kind`.

    ```python
    foos = custom_resource("Foo").group("clux.dev").version("v1").within("myns").build()
    ```
    """
    return CrBuilder(kind)
