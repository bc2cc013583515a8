"""Operators used to express label and field selector requirements.

```python
ListParams(labels={"env": not_in(["dev", "test"]), "tier": exists()})
```
"""
from typing import Iterable, List

__all__ = ['in_', 'not_in', 'exists', 'not_exists', 'equal', 'not_equal']


class Operator:
    op_name: str = None

    def encode(self, key: str) -> str:
        raise NotImplementedError

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self):
        return f"{type(self).__name__}({vars(self)})"


class BinaryOperator(Operator):
    symbol: str = None

    def __init__(self, value: str):
        self.value = value

    def encode(self, key):
        return f"{key}{self.symbol}{self.value}"


class Equal(BinaryOperator):
    op_name = 'equal'
    symbol = '='


class NotEqual(BinaryOperator):
    op_name = 'not_equal'
    symbol = '!='


class SequenceOperator(Operator):
    keyword: str = None

    def __init__(self, values: Iterable[str]):
        self.values: List[str] = sorted(values)

    def encode(self, key):
        return f"{key} {self.keyword} ({','.join(self.values)})"


class In(SequenceOperator):
    op_name = 'in_'
    keyword = 'in'


class NotIn(SequenceOperator):
    op_name = 'not_in'
    keyword = 'notin'


class UnaryOperator(Operator):
    prefix = ''

    def encode(self, key):
        return f"{self.prefix}{key}"


class Exists(UnaryOperator):
    op_name = 'exists'


class NotExists(UnaryOperator):
    op_name = 'not_exists'
    prefix = '!'


def in_(values: Iterable[str]) -> In:
    return In(values)


def not_in(values: Iterable[str]) -> NotIn:
    return NotIn(values)


def exists() -> Exists:
    return Exists()


def not_exists() -> NotExists:
    return NotExists()


def equal(value: str) -> Equal:
    return Equal(value)


def not_equal(value: str) -> NotEqual:
    return NotEqual(value)
