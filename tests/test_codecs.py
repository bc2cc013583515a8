import io
import textwrap

import pytest
import yaml

from lightcr import codecs, LoadResourceError, Generic, RawApi

MANIFESTS = textwrap.dedent("""
    apiVersion: clux.dev/v1
    kind: Foo
    metadata:
      name: baz
      namespace: myns
    spec:
      replicas: 2
    ---
    ---
    apiVersion: v1
    kind: ConfigMap
    metadata:
      name: cm1
    data:
      key: value
""")


def test_from_dict():
    foo = codecs.from_dict({'apiVersion': 'clux.dev/v1', 'kind': 'Foo', 'metadata': {'name': 'baz'}})
    assert isinstance(foo, Generic)
    assert foo.kind == 'Foo'
    assert foo.metadata.name == 'baz'


def test_from_dict_wrong_model():
    with pytest.raises(LoadResourceError, match=r".*not a dict"):
        codecs.from_dict([])

    with pytest.raises(LoadResourceError, match=r".*key 'apiVersion' missing"):
        codecs.from_dict({'kind': 'Foo'})

    with pytest.raises(LoadResourceError, match=r".*key 'kind' missing"):
        codecs.from_dict({'apiVersion': 'v1'})


def test_load_all_yaml():
    objs = codecs.load_all_yaml(MANIFESTS)
    assert [o.kind for o in objs] == ['Foo', 'ConfigMap']
    assert objs[0].spec.replicas == 2

    objs = codecs.load_all_yaml(io.StringIO(MANIFESTS))
    assert len(objs) == 2

    assert codecs.load_all_yaml("") == []


def test_dump_all_yaml():
    objs = codecs.load_all_yaml(MANIFESTS)
    text = codecs.dump_all_yaml(objs)
    assert list(yaml.safe_load_all(text)) == [o.to_dict() for o in objs]

    stream = io.StringIO()
    codecs.dump_all_yaml([{'apiVersion': 'v1', 'kind': 'Secret'}], stream)
    assert yaml.safe_load(stream.getvalue()) == {'apiVersion': 'v1', 'kind': 'Secret'}


def test_descriptor_for():
    foo, cm = codecs.load_all_yaml(MANIFESTS)

    res = codecs.descriptor_for(foo)
    assert (res.kind, res.group, res.version, res.namespace) == ('Foo', 'clux.dev', 'v1', 'myns')
    assert RawApi(res).get(foo.metadata.name).uri == '/apis/clux.dev/v1/namespaces/myns/foos/baz'

    res = codecs.descriptor_for(cm)
    assert (res.group, res.api_version, res.plural, res.namespace) == ('', 'v1', 'configmaps', None)


def test_descriptor_for_errors():
    with pytest.raises(LoadResourceError, match='apiVersion'):
        codecs.descriptor_for({'apiVersion': '/v1', 'kind': 'Foo'})

    with pytest.raises(LoadResourceError, match='apiVersion'):
        codecs.descriptor_for({'apiVersion': 'clux.dev/', 'kind': 'Foo'})

    with pytest.raises(LoadResourceError, match='PascalCase'):
        codecs.descriptor_for({'apiVersion': 'clux.dev/v1', 'kind': 'foo'})

    with pytest.raises(LoadResourceError, match='metadata'):
        codecs.descriptor_for({'apiVersion': 'clux.dev/v1', 'kind': 'Foo', 'metadata': 'bla'})

    with pytest.raises(LoadResourceError, match='kind'):
        codecs.descriptor_for({'apiVersion': 'clux.dev/v1', 'kind': 3})

    with pytest.raises(LoadResourceError, match='namespace'):
        codecs.descriptor_for({'apiVersion': 'clux.dev/v1', 'kind': 'Foo', 'metadata': {'namespace': ''}})


def test_split_api_version():
    assert codecs.split_api_version('v1') == ('', 'v1')
    assert codecs.split_api_version('apps/v1') == ('apps', 'v1')


def test_descriptor_for_resource_quota():
    res = codecs.descriptor_for({'apiVersion': 'v1', 'kind': 'ResourceQuota', 'metadata': {'namespace': 'ns'}})
    assert RawApi(res).list().path == '/api/v1/namespaces/ns/resourcequotas'
