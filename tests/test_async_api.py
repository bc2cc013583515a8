import json

import httpx
import pytest
import respx

from lightcr import custom_resource, AsyncApi, ApiError, ListParams, PatchParams

BASE = "https://localhost:9443/apis/clux.dev/v1/foos"


@pytest.fixture
def foos():
    return custom_resource("Foo").group("clux.dev").version("v1").build()


@pytest.fixture
def client():
    return httpx.AsyncClient(base_url="https://localhost:9443")


@respx.mock
@pytest.mark.asyncio
async def test_get(foos, client):
    respx.get(f"{BASE}/baz").respond(json={'metadata': {'name': 'baz'}})
    api = AsyncApi(foos, client)
    foo = await api.get("baz")
    assert foo.metadata.name == 'baz'
    assert foo.kind == 'Foo'
    await client.aclose()


@respx.mock
@pytest.mark.asyncio
async def test_create_and_patch(foos, client):
    api = AsyncApi(foos, client, field_manager='ctrl')

    route = respx.post(f"{BASE}?fieldManager=ctrl").respond(json={'metadata': {'name': 'baz'}})
    foo = await api.create({'metadata': {'name': 'baz'}})
    assert foo.metadata.name == 'baz'
    assert json.loads(route.calls.last.request.content)['kind'] == 'Foo'

    route = respx.patch(f"{BASE}/baz?fieldManager=ctrl").respond(json={'spec': {'a': 1}})
    foo = await api.patch("baz", b'{"spec": {"a": 1}}', PatchParams())
    assert foo.spec.a == 1
    assert route.calls.last.request.content == b'{"spec": {"a": 1}}'
    await client.aclose()


@respx.mock
@pytest.mark.asyncio
async def test_list_chunks(foos, client):
    resp = {'items': [{'metadata': {'name': 'xx'}}, {'metadata': {'name': 'yy'}}], 'metadata': {'continue': 'yes'}}
    respx.get(f"{BASE}?limit=2").respond(json=resp)
    resp = {'items': [{'metadata': {'name': 'zz'}}]}
    respx.get(f"{BASE}?limit=2&continue=yes").respond(json=resp)

    api = AsyncApi(foos, client)
    assert [foo.metadata.name async for foo in api.list(ListParams(limit=2))] == ['xx', 'yy', 'zz']
    await client.aclose()


@respx.mock
@pytest.mark.asyncio
async def test_watch(foos, client):
    lines = [
        {'type': 'ADDED', 'object': {'metadata': {'name': 'a'}}},
        {'type': 'DELETED', 'object': {'metadata': {'name': 'a'}}},
    ]
    content = "\n".join(json.dumps(line) for line in lines)
    respx.get(f"{BASE}?watch=true").respond(content=content)

    api = AsyncApi(foos, client)
    events = [(tp, obj.metadata.name) async for tp, obj in api.watch()]
    assert events == [('ADDED', 'a'), ('DELETED', 'a')]
    await client.aclose()


@respx.mock
@pytest.mark.asyncio
async def test_delete_and_errors(foos, client):
    api = AsyncApi(foos, client)

    route = respx.delete(f"{BASE}/baz").respond(json={'kind': 'Status'})
    await api.delete("baz")
    assert route.called

    respx.get(f"{BASE}/missing").respond(json={'message': 'not found', 'code': 404}, status_code=404)
    with pytest.raises(ApiError) as exc:
        await api.get("missing")
    assert exc.value.code == 404

    respx.get(f"{BASE}/baz/scale").respond(json={'spec': {'replicas': 1}})
    scale = await api.get_scale("baz")
    assert scale.spec.replicas == 1
    await client.aclose()
