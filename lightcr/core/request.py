import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping as MappingType, Optional
from urllib.parse import quote

import httpx

from ..utils.text import pluralize
from .params import PostParams, PatchParams, ListParams, DeleteParams
from .resource import ResourceDescriptor, make_api_version
from ..types import PatchType

METHOD_MAPPING = {
    "delete": "DELETE",
    "deletecollection": "DELETE",
    "get": "GET",
    "list": "GET",
    "patch": "PATCH",
    "post": "POST",
    "put": "PUT",
    "watch": "GET",
}

ITEM_VERBS = ("delete", "get", "patch", "put")
BODY_VERBS = ("post", "put", "patch")
SUBRESOURCES = {
    "status": ("get", "patch", "put"),
    "scale": ("get", "patch", "put"),
}

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class RequestSpec:
    """A fully routed request, ready to be handed to a transport.

    `path` is absolute and `query` is already url-encoded, without the leading `?`.
    `headers` is a read-only mapping.
    """
    method: str
    path: str
    query: str = ""
    body: Optional[bytes] = None
    headers: MappingType[str, str] = dataclasses.field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def uri(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path


def check_descriptor(res: ResourceDescriptor):
    if not isinstance(res, ResourceDescriptor):
        raise ValueError(f"Expected a ResourceDescriptor, got {type(res).__name__}")
    if res.api_version != make_api_version(res.group, res.version) or res.plural != pluralize(res.kind):
        raise ValueError(f"Malformed resource descriptor {res!r}, use custom_resource() to create it")
    if res.namespace == "":
        raise ValueError("namespace must not be empty, use None for cluster scoped resources")


def base_path(res: ResourceDescriptor) -> str:
    """Return the collection path of the resource, e.g. `/apis/clux.dev/v1/namespaces/myns/foos`"""
    path = ["/api"] if res.group == "" else ["/apis"]
    path.append(res.api_version)
    if res.namespaced:
        path.extend(["namespaces", quote(res.namespace, safe="")])
    path.append(res.plural)
    return "/".join(path)


def encode_query(params: Optional[Mapping]) -> str:
    if not params:
        return ""
    return str(httpx.QueryParams({k: v for k, v in params.items() if v is not None}))


def encode_body(res: ResourceDescriptor, obj, complete: bool = True) -> bytes:
    """Serialize `obj` as JSON. Bytes are returned unchanged.

    When `complete` is set, `apiVersion` and `kind` are filled from the descriptor
    as the API server rejects custom objects without them.
    """
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj)
    if hasattr(obj, "to_dict"):
        obj = obj.to_dict()
    if complete and isinstance(obj, Mapping):
        obj = dict(obj)
        obj.setdefault("apiVersion", res.api_version)
        obj.setdefault("kind", res.kind)
    return json.dumps(obj).encode()


def prepare_request(
    res: ResourceDescriptor,
    verb: str,
    name: str = None,
    *,
    obj: Any = None,
    params: dict = None,
    headers: dict = None,
    subresource: str = None,
) -> RequestSpec:
    """Build the request for `verb` on the resource described by `res`.

    **Parameters**

    * **res** `ResourceDescriptor` - Resource to address.
    * **verb** `str` - One of the keys of `METHOD_MAPPING`.
    * **name** `str` - Name of the object. Required for item verbs and subresources, optional for `watch`.
    * **obj** - Body of `post`, `put` and `patch`. Either raw bytes or a JSON serializable object.
    * **params** `dict` - Query parameters. Entries set to `None` are skipped.
    * **headers** `dict` - Additional headers. `patch` requires a `Content-Type`.
    * **subresource** `str` - `status` or `scale`.
    """
    check_descriptor(res)
    if verb not in METHOD_MAPPING:
        raise ValueError(f"Unsupported verb '{verb}'")
    if subresource is not None:
        if subresource not in SUBRESOURCES:
            raise ValueError(f"Unsupported subresource '{subresource}'")
        if verb not in SUBRESOURCES[subresource]:
            raise ValueError(f"Verb '{verb}' not supported by subresource '{subresource}'")

    params = dict(params) if params else {}
    headers = {k: v for k, v in headers.items() if v is not None} if headers else {}
    if verb == "watch":
        params = {"watch": "true", **params}

    path = [base_path(res)]
    if verb in ITEM_VERBS or subresource is not None:
        if name is None:
            raise ValueError("resource name not defined")
        path.append(quote(name, safe=""))
    elif name is not None:
        if verb != "watch":
            raise ValueError(f"Verb '{verb}' works on collections and does not accept a name")
        path.append(quote(name, safe=""))
    if subresource is not None:
        path.append(subresource)

    body = None
    if verb in BODY_VERBS:
        if obj is None:
            raise ValueError("obj is required for post, put or patch")
        if verb == "patch":
            content_type = headers.get("Content-Type")
            if content_type is None:
                raise ValueError("patch requires a Content-Type header with the patch strategy")
            if content_type == PatchType.APPLY.value and params.get("fieldManager") is None:
                raise ValueError('Parameter "field_manager" is required for PatchType.APPLY')
            body = encode_body(res, obj, complete=content_type == PatchType.APPLY.value)
        else:
            headers.setdefault("Content-Type", JSON_CONTENT_TYPE)
            # a scale body is an autoscaling/v1 Scale, not an instance of the resource
            body = encode_body(res, obj, complete=subresource != "scale")

    return RequestSpec(
        method=METHOD_MAPPING[verb],
        path="/".join(path),
        query=encode_query(params),
        body=body,
        headers=headers,
    )


class RawApi:
    """Request synthesizer bound to a `ResourceDescriptor`.

    Every method is a pure function of its arguments and returns a `RequestSpec`:

    ```python
    foos = custom_resource("Foo").group("clux.dev").version("v1").within("myns").build()
    req = RawApi(foos).patch("baz", b'{"spec": {"a": 1}}')
    assert req.uri == "/apis/clux.dev/v1/namespaces/myns/foos/baz"
    ```
    """

    def __init__(self, res: ResourceDescriptor):
        check_descriptor(res)
        self.res = res

    def __repr__(self):
        return f"RawApi({self.res!r})"

    def create(self, obj, params: PostParams = None) -> RequestSpec:
        params = params or PostParams()
        return prepare_request(self.res, "post", obj=obj, params=params.to_params())

    def get(self, name: str) -> RequestSpec:
        return prepare_request(self.res, "get", name)

    def list(self, params: ListParams = None) -> RequestSpec:
        params = params or ListParams()
        return prepare_request(self.res, "list", params=params.to_params())

    def watch(self, params: ListParams = None, *, name: str = None) -> RequestSpec:
        """Watch the collection, or the single object `name` when given"""
        params = params or ListParams()
        return prepare_request(self.res, "watch", name, params=params.to_params(watch=True))

    def patch(self, name: str, obj, params: PatchParams = None) -> RequestSpec:
        return self._patch(name, obj, params)

    def replace(self, name: str, obj, params: PostParams = None) -> RequestSpec:
        params = params or PostParams()
        return prepare_request(self.res, "put", name, obj=obj, params=params.to_params())

    def delete(self, name: str, params: DeleteParams = None) -> RequestSpec:
        params = params or DeleteParams()
        return prepare_request(self.res, "delete", name, params=params.to_params())

    def delete_collection(self, list_params: ListParams = None, params: DeleteParams = None) -> RequestSpec:
        list_params = list_params or ListParams()
        params = params or DeleteParams()
        return prepare_request(
            self.res, "deletecollection", params={**list_params.to_params(), **params.to_params()}
        )

    def get_status(self, name: str) -> RequestSpec:
        return prepare_request(self.res, "get", name, subresource="status")

    def patch_status(self, name: str, obj, params: PatchParams = None) -> RequestSpec:
        return self._patch(name, obj, params, subresource="status")

    def replace_status(self, name: str, obj, params: PostParams = None) -> RequestSpec:
        params = params or PostParams()
        return prepare_request(self.res, "put", name, obj=obj, params=params.to_params(), subresource="status")

    def get_scale(self, name: str) -> RequestSpec:
        return prepare_request(self.res, "get", name, subresource="scale")

    def patch_scale(self, name: str, obj, params: PatchParams = None) -> RequestSpec:
        return self._patch(name, obj, params, subresource="scale")

    def replace_scale(self, name: str, obj, params: PostParams = None) -> RequestSpec:
        params = params or PostParams()
        return prepare_request(self.res, "put", name, obj=obj, params=params.to_params(), subresource="scale")

    def _patch(self, name, obj, params: Optional[PatchParams], subresource=None) -> RequestSpec:
        params = params or PatchParams()
        return prepare_request(
            self.res,
            "patch",
            name,
            obj=obj,
            params=params.to_params(),
            headers={"Content-Type": params.content_type},
            subresource=subresource,
        )
