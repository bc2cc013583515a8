from collections.abc import Iterable, Mapping
from typing import List, Tuple, Union

from .. import operators

LabelValue = Union[str, None, operators.Operator, Iterable]
FieldValue = Union[str, operators.BinaryOperator, operators.SequenceOperator]
Selector = Union[str, Mapping[str, LabelValue], List[Tuple[str, LabelValue]]]

FIELDS_SUPPORT = ('equal', 'not_equal', 'not_in')


def _as_operator(value) -> operators.Operator:
    if value is None:
        return operators.exists()
    if isinstance(value, operators.Operator):
        return value
    if isinstance(value, str):
        return operators.equal(value)
    if isinstance(value, Iterable):
        return operators.in_(value)
    raise ValueError(f"selector value '{value}' should be str, None, Iterable or instance of operator")


def build_selector(pairs: Selector, for_fields=False) -> str:
    """Encode a label (or field) selector.

    Strings are passed through unchanged. Mappings and lists of pairs are encoded
    requirement by requirement and joined with commas.
    """
    if isinstance(pairs, str):
        return pairs
    if isinstance(pairs, Mapping):
        pairs = pairs.items()

    requirements = []
    for key, value in pairs:
        op = _as_operator(value)
        if not for_fields:
            requirements.append(op.encode(key))
            continue

        if op.op_name not in FIELDS_SUPPORT:
            supported = ', '.join(f'"{name}"' for name in FIELDS_SUPPORT)
            raise ValueError(f"field selectors only support operators {supported}")
        if isinstance(op, operators.NotIn):
            # field selectors have no set operators, expand to several "!="
            requirements.extend(operators.not_equal(v).encode(key) for v in op.values)
        else:
            requirements.append(op.encode(key))
    return ','.join(requirements)
