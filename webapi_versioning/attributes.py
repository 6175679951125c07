"""
Controller Attributes

Declarative metadata attached to controller classes by decorators.

Attributes are frozen dataclasses so they compare by value and can be
de-duplicated when a descriptor group merges them.

Example:
    @api_version("1.0")
    @api_version("0.9", deprecated=True)
    class UsersController(Controller):
        ...
"""

from dataclasses import dataclass
from typing import Any, Callable, Tuple, Type, TypeVar, Union

from .faults import InvalidArgumentFault
from .version import ApiVersion


ATTRIBUTES_KEY = "__controller_attributes__"

T = TypeVar("T")


@dataclass(frozen=True)
class ApiVersionAttribute:
    """Versions implemented by a controller."""
    versions: Tuple[ApiVersion, ...]
    deprecated: bool = False


@dataclass(frozen=True)
class ApiVersionNeutralAttribute:
    """Marks a controller as serving every API version."""


@dataclass(frozen=True)
class ControllerNameAttribute:
    """Overrides the logical controller name used for grouping."""
    name: str


def own_attributes(cls: type) -> Tuple[Any, ...]:
    """Attributes declared directly on ``cls``, not inherited."""
    return cls.__dict__.get(ATTRIBUTES_KEY, ())


def add_attribute(cls: Type[T], attribute: Any) -> Type[T]:
    """Append an attribute to the class's own attribute tuple."""
    setattr(cls, ATTRIBUTES_KEY, own_attributes(cls) + (attribute,))
    return cls


def attribute(*attributes: Any) -> Callable[[Type[T]], Type[T]]:
    """
    Attach arbitrary hashable attributes to a controller class.

    Example:
        @attribute(RequiresRole("admin"))
        class AdminController(Controller):
            ...
    """
    if not attributes:
        raise InvalidArgumentFault("attributes")

    def decorator(cls: Type[T]) -> Type[T]:
        for item in attributes:
            add_attribute(cls, item)
        return cls

    return decorator


def api_version(
    *versions: Union[ApiVersion, str, int, float],
    deprecated: bool = False,
) -> Callable[[Type[T]], Type[T]]:
    """
    Declare the API versions a controller implements.

    Args:
        *versions: Versions as ApiVersion, text or numbers
        deprecated: Whether these versions are deprecated
    """
    if not versions:
        raise InvalidArgumentFault("versions")
    parsed = tuple(ApiVersion.coerce(v) for v in versions)

    def decorator(cls: Type[T]) -> Type[T]:
        return add_attribute(cls, ApiVersionAttribute(parsed, deprecated))

    return decorator


def api_version_neutral(cls: Type[T]) -> Type[T]:
    """Declare a controller API version-neutral."""
    return add_attribute(cls, ApiVersionNeutralAttribute())


def controller_name(name: str) -> Callable[[Type[T]], Type[T]]:
    """Set the logical controller name a class is grouped under."""
    if not name:
        raise InvalidArgumentFault("name")

    def decorator(cls: Type[T]) -> Type[T]:
        return add_attribute(cls, ControllerNameAttribute(name))

    return decorator


__all__ = [
    "ApiVersionAttribute",
    "ApiVersionNeutralAttribute",
    "ControllerNameAttribute",
    "attribute",
    "api_version",
    "api_version_neutral",
    "controller_name",
    "own_attributes",
    "add_attribute",
]
