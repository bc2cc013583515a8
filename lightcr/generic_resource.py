from typing import Any, Optional

__all__ = ['Generic']


class Generic(dict):
    """Dictionary based representation of an arbitrary kubernetes object.

    Top level keys are also available as attributes, nested mappings are returned as `Generic`:

    ```python
    foo = Generic.from_dict({'metadata': {'name': 'bla'}, 'spec': {'replicas': 2}})
    assert foo.metadata.name == 'bla'
    assert foo.spec.replicas == 2
    ```
    """

    @property
    def apiVersion(self) -> Optional[str]:
        return self.get('apiVersion')

    @property
    def kind(self) -> Optional[str]:
        return self.get('kind')

    @property
    def metadata(self) -> Optional["Generic"]:
        return self._wrap(self.get('metadata'))

    @property
    def status(self) -> Any:
        return self._wrap(self.get('status'))

    def __getattr__(self, item):
        if item.startswith("_"):
            raise AttributeError(f"{item} not found")
        return self._wrap(self.get(item))

    @staticmethod
    def _wrap(value):
        if isinstance(value, dict) and not isinstance(value, Generic):
            return Generic(value)
        return value

    @classmethod
    def from_dict(cls, d: dict, lazy=True):
        return cls(d)

    def to_dict(self, dict_factory=dict):
        return dict_factory(
            (k, v.to_dict(dict_factory) if isinstance(v, Generic) else v) for k, v in self.items()
        )
