"""
Declarative field tables shared by every ``from_tree()`` / ``to_tree()`` pair.

Each model lists its optional wire fields once, as ``FieldSpec`` rows. The same
row drives both directions: on load the value is taken only when it has the
expected type, on dump it is skipped when ``omit(value)`` holds.
"""
import copy
from typing import Any, Callable, Dict, Iterable, NamedTuple, Optional, Tuple, Type, Union

Kind = Union[Type, Tuple[Type, ...]]


def is_empty(value: Any) -> bool:
    """ None, empty string and empty collections are all 'unset'. """
    return value is None or value == "" or value == [] or value == {}


def is_none(value: Any) -> bool:
    return value is None


def is_false(value: Any) -> bool:
    return not value


def never(value: Any) -> bool:
    return False


def equals(default: Any) -> Callable[[Any], bool]:
    """ Omit the field when it still holds ``default``. """
    def _omit(value: Any) -> bool:
        return value == default
    return _omit


class FieldSpec(NamedTuple):
    key: str                                   # name in the YAML document
    attr: str                                  # attribute on the model
    kind: Kind                                 # accepted type(s) on load
    omit: Callable[[Any], bool] = is_empty
    load: Optional[Callable[[Any], Any]] = None
    dump: Optional[Callable[[Any], Any]] = None


def accepts(value: Any, kind: Kind) -> bool:
    """isinstance() that does not let bools pass for ints."""
    kinds = kind if isinstance(kind, tuple) else (kind,)
    if isinstance(value, bool) and bool not in kinds and object not in kinds:
        return False
    return isinstance(value, kinds)


def read_fields(data: Dict[str, Any], table: Iterable[FieldSpec]) -> Dict[str, Any]:
    """Collect constructor kwargs for every row present in ``data`` with the right type.

    Rows that are missing or mistyped are left out so the model default applies.
    """
    kwargs: Dict[str, Any] = {}
    for spec in table:
        if spec.key not in data:
            continue
        value = data[spec.key]
        if value is None or not accepts(value, spec.kind):
            continue
        kwargs[spec.attr] = spec.load(value) if spec.load else copy.deepcopy(value)
    return kwargs


def write_fields(data: Dict[str, Any], obj: Any, table: Iterable[FieldSpec]) -> Dict[str, Any]:
    """ Append every non-omitted row of ``obj`` to ``data`` (in table order). """
    for spec in table:
        value = getattr(obj, spec.attr)
        if spec.omit(value):
            continue
        data[spec.key] = spec.dump(value) if spec.dump else copy.deepcopy(value)
    return data


def mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """ ``data[key]`` when it is a dict, otherwise an empty dict. """
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def string(data: Dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default
