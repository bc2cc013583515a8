import dataclasses
import json
import logging
import typing
from typing import AsyncIterator, Iterator, Optional, Tuple, Type, TypeVar, Union

import httpx

from ..generic_resource import Generic
from .exceptions import ApiError
from .params import PostParams, PatchParams, ListParams, DeleteParams
from .request import RawApi, RequestSpec
from .resource import ResourceDescriptor
from .selector import build_selector

T = TypeVar("T")
logger = logging.getLogger(__name__)


def transform_exception(e: httpx.HTTPError):
    if (
        isinstance(e, httpx.HTTPStatusError)
        and e.response.headers.get("Content-Type") == "application/json"
    ):
        return ApiError(request=e.request, response=e.response)
    return e


class BaseApi(typing.Generic[T]):
    """Bind a `ResourceDescriptor` to an httpx client and a response type.

    Parameters:
      res: Resource to access.
      client: `httpx.Client` (or `httpx.AsyncClient` for `AsyncApi`) used to send the requests. The client is
        expected to be configured with the API server `base_url` and the needed authentication.
      response_type: Class used to decode the returned objects. It needs to implement a `from_dict` classmethod.
        Default: `Generic`.
      field_manager: Name associated with the actor or entity that is making these changes. Used when the
        call parameters don't define one.
      dry_run: Apply server-side dry-run to every create, replace and patch.
    """

    def __init__(
        self,
        res: ResourceDescriptor,
        client: Union[httpx.Client, httpx.AsyncClient],
        response_type: Type[T] = None,
        field_manager: str = None,
        dry_run: bool = False,
    ):
        self.raw = RawApi(res)
        self._client = client
        self._response_type = Generic if response_type is None else response_type
        self._field_manager = field_manager
        self._dry_run = dry_run
        self._watch_timeout = httpx.Timeout(client.timeout)
        self._watch_timeout.read = None

    @property
    def res(self) -> ResourceDescriptor:
        return self.raw.res

    def _write_params(self, params, params_cls):
        params = params_cls() if params is None else params
        changes = {}
        if params.field_manager is None and self._field_manager is not None:
            changes["field_manager"] = self._field_manager
        if self._dry_run and not params.dry_run:
            changes["dry_run"] = True
        return dataclasses.replace(params, **changes) if changes else params

    def _build_request(self, spec: RequestSpec, timeout: httpx.Timeout = None) -> httpx.Request:
        logger.debug("%s %s", spec.method, spec.uri)
        extra = {} if timeout is None else {"timeout": timeout}
        return self._client.build_request(
            spec.method, spec.uri, content=spec.body, headers=dict(spec.headers), **extra
        )

    def _watch_request(self, params: Optional[ListParams], name: Optional[str]) -> httpx.Request:
        # api servers only stream events for collections, a single object is selected by name
        if name is not None:
            params = ListParams() if params is None else params
            selector = f"metadata.name={name}"
            if params.fields:
                selector = f"{build_selector(params.fields, for_fields=True)},{selector}"
            params = dataclasses.replace(params, fields=selector)
        return self._build_request(self.raw.watch(params), timeout=self._watch_timeout)

    def _convert(self, item: dict) -> T:
        item.setdefault("apiVersion", self.res.api_version)
        item.setdefault("kind", self.res.kind)
        return self._response_type.from_dict(item)

    def _decode_event(self, line: str) -> Tuple[str, T]:
        event = json.loads(line)
        return event["type"], self._convert(event["object"])

    @staticmethod
    def _next_page(params: ListParams, data: dict) -> Optional[ListParams]:
        token = (data.get("metadata") or {}).get("continue")
        return dataclasses.replace(params, continue_token=token) if token else None

    @staticmethod
    def raise_for_status(resp: httpx.Response):
        try:
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise transform_exception(e)


class Api(BaseApi[T]):
    """Synchronous access to a resource through an `httpx.Client`.

    ```python
    foos = custom_resource("Foo").group("clux.dev").version("v1").within("myns").build()
    with httpx.Client(base_url="https://localhost:6443") as client:
        api = Api(foos, client)
        foo = api.get("baz")
    ```
    """

    def request(self, spec: RequestSpec) -> httpx.Response:
        """Send `spec` and return the response. Raise `ApiError` for error responses."""
        resp = self._client.send(self._build_request(spec))
        self.raise_for_status(resp)
        return resp

    def _fetch(self, spec: RequestSpec) -> T:
        return self._convert(self.request(spec).json())

    def create(self, obj, params: PostParams = None) -> T:
        """Create a new object and return its representation"""
        return self._fetch(self.raw.create(obj, self._write_params(params, PostParams)))

    def get(self, name: str) -> T:
        return self._fetch(self.raw.get(name))

    def list(self, params: ListParams = None) -> Iterator[T]:
        """Iterate over the objects matching `params`. When `params.limit` is set, the following
        pages are fetched automatically.
        """
        params = ListParams() if params is None else params
        while params is not None:
            data = self.request(self.raw.list(params)).json()
            for item in data.get("items") or []:
                yield self._convert(item)
            params = self._next_page(params, data)

    def watch(self, params: ListParams = None, *, name: str = None) -> Iterator[Tuple[str, T]]:
        """Yield `(event_type, object)` pairs until the server closes the stream.

        When `name` is set, only the events of that object are returned.
        """
        req = self._watch_request(params, name)
        resp = self._client.send(req, stream=True)
        try:
            if resp.is_error:
                resp.read()
            self.raise_for_status(resp)
            for line in resp.iter_lines():
                if line:
                    yield self._decode_event(line)
        finally:
            resp.close()

    def patch(self, name: str, obj, params: PatchParams = None) -> T:
        return self._fetch(self.raw.patch(name, obj, self._write_params(params, PatchParams)))

    def replace(self, name: str, obj, params: PostParams = None) -> T:
        return self._fetch(self.raw.replace(name, obj, self._write_params(params, PostParams)))

    def delete(self, name: str, params: DeleteParams = None) -> None:
        self.request(self.raw.delete(name, params))

    def delete_collection(self, list_params: ListParams = None, params: DeleteParams = None) -> None:
        self.request(self.raw.delete_collection(list_params, params))

    def get_status(self, name: str) -> T:
        return self._fetch(self.raw.get_status(name))

    def patch_status(self, name: str, obj, params: PatchParams = None) -> T:
        return self._fetch(self.raw.patch_status(name, obj, self._write_params(params, PatchParams)))

    def replace_status(self, name: str, obj, params: PostParams = None) -> T:
        return self._fetch(self.raw.replace_status(name, obj, self._write_params(params, PostParams)))

    def get_scale(self, name: str) -> Generic:
        return Generic.from_dict(self.request(self.raw.get_scale(name)).json())

    def patch_scale(self, name: str, obj, params: PatchParams = None) -> Generic:
        spec = self.raw.patch_scale(name, obj, self._write_params(params, PatchParams))
        return Generic.from_dict(self.request(spec).json())


class AsyncApi(BaseApi[T]):
    """Same as `Api` but using an `httpx.AsyncClient`"""

    async def request(self, spec: RequestSpec) -> httpx.Response:
        resp = await self._client.send(self._build_request(spec))
        self.raise_for_status(resp)
        return resp

    async def _fetch(self, spec: RequestSpec) -> T:
        resp = await self.request(spec)
        return self._convert(resp.json())

    async def create(self, obj, params: PostParams = None) -> T:
        return await self._fetch(self.raw.create(obj, self._write_params(params, PostParams)))

    async def get(self, name: str) -> T:
        return await self._fetch(self.raw.get(name))

    async def list(self, params: ListParams = None) -> AsyncIterator[T]:
        params = ListParams() if params is None else params
        while params is not None:
            resp = await self.request(self.raw.list(params))
            data = resp.json()
            for item in data.get("items") or []:
                yield self._convert(item)
            params = self._next_page(params, data)

    async def watch(self, params: ListParams = None, *, name: str = None) -> AsyncIterator[Tuple[str, T]]:
        req = self._watch_request(params, name)
        resp = await self._client.send(req, stream=True)
        try:
            if resp.is_error:
                await resp.aread()
            self.raise_for_status(resp)
            async for line in resp.aiter_lines():
                if line:
                    yield self._decode_event(line)
        finally:
            await resp.aclose()

    async def patch(self, name: str, obj, params: PatchParams = None) -> T:
        return await self._fetch(self.raw.patch(name, obj, self._write_params(params, PatchParams)))

    async def replace(self, name: str, obj, params: PostParams = None) -> T:
        return await self._fetch(self.raw.replace(name, obj, self._write_params(params, PostParams)))

    async def delete(self, name: str, params: DeleteParams = None) -> None:
        await self.request(self.raw.delete(name, params))

    async def delete_collection(self, list_params: ListParams = None, params: DeleteParams = None) -> None:
        await self.request(self.raw.delete_collection(list_params, params))

    async def get_status(self, name: str) -> T:
        return await self._fetch(self.raw.get_status(name))

    async def patch_status(self, name: str, obj, params: PatchParams = None) -> T:
        return await self._fetch(self.raw.patch_status(name, obj, self._write_params(params, PatchParams)))

    async def replace_status(self, name: str, obj, params: PostParams = None) -> T:
        return await self._fetch(self.raw.replace_status(name, obj, self._write_params(params, PostParams)))

    async def get_scale(self, name: str) -> Generic:
        resp = await self.request(self.raw.get_scale(name))
        return Generic.from_dict(resp.json())

    async def patch_scale(self, name: str, obj, params: PatchParams = None) -> Generic:
        resp = await self.request(self.raw.patch_scale(name, obj, self._write_params(params, PatchParams)))
        return Generic.from_dict(resp.json())
