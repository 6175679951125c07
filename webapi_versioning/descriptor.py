"""
Controller Descriptors

A descriptor describes one controller implementation: its logical name,
the class that implements it, the API versions it declares, its attributes
and its filters, and how to create an instance of it for a request.
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterable, List, Optional, Type, TypeVar
import logging

from .attributes import (
    ApiVersionAttribute,
    ApiVersionNeutralAttribute,
    ControllerNameAttribute,
    own_attributes,
)
from .config import VersioningConfig
from .factory import ControllerFactory
from .faults import InvalidArgumentFault
from .version import ApiVersion


logger = logging.getLogger("webapi_versioning.descriptor")

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)


def distinct(items: Iterable[H]) -> List[H]:
    """Remove duplicates by value, keeping first-occurrence order."""
    return list(dict.fromkeys(items))


class Controller:
    """
    Base class for versioned controllers.

    Class Attributes:
        controller_name: Logical name shared by all versions of a controller
        pipeline: Filters applied to every action of the controller
        tags: OpenAPI tags

    Example:
        @api_version("1.0")
        class UsersController(Controller):
            pipeline = [require_auth]

        @api_version("2.0")
        @controller_name("users")
        class UsersV2Controller(Controller):
            pipeline = [require_auth]
    """

    controller_name: Optional[str] = None
    pipeline: List[Any] = []
    tags: List[str] = []


class Descriptor(ABC):
    """Capabilities every controller descriptor provides."""

    @property
    @abstractmethod
    def controller_name(self) -> str:
        ...

    @property
    @abstractmethod
    def controller_type(self) -> Type:
        ...

    @abstractmethod
    def create_controller(self, request: Any) -> Any:
        """Create the controller that will serve ``request``."""

    @abstractmethod
    def declared_versions(self) -> frozenset:
        """API versions the controller implements."""

    @abstractmethod
    def custom_attributes(self, attr_type: Type[T], inherit: bool = True) -> List[T]:
        """Attributes of ``attr_type`` attached to the controller."""

    @abstractmethod
    def filters(self) -> List[Any]:
        """Filters (pipeline nodes) applied to the controller."""


def _derive_name(controller_type: Type) -> str:
    name = controller_type.__name__
    if name.endswith("Controller") and name != "Controller":
        name = name[: -len("Controller")]
    return name.lower()


class ControllerDescriptor(Descriptor):
    """
    Descriptor for a single controller class.

    Args:
        controller_type: The controller class
        controller_name: Logical name (derived from the class when omitted)
        configuration: Versioning options
        factory: Factory used to create controller instances
    """

    def __init__(
        self,
        controller_type: Type,
        *,
        controller_name: Optional[str] = None,
        configuration: Optional[VersioningConfig] = None,
        factory: Optional[ControllerFactory] = None,
    ):
        if controller_type is None:
            raise InvalidArgumentFault("controller_type")
        if not isinstance(controller_type, type):
            raise InvalidArgumentFault("controller_type", "must be a class")
        if controller_name is not None and not controller_name:
            raise InvalidArgumentFault("controller_name")

        self._controller_type = controller_type
        self.configuration = configuration or VersioningConfig()
        self.factory = factory or ControllerFactory()
        self._controller_name = controller_name or self._resolve_name()

    def _resolve_name(self) -> str:
        names = self.custom_attributes(ControllerNameAttribute)
        if names:
            return names[0].name
        declared = getattr(self._controller_type, "controller_name", None)
        if isinstance(declared, str) and declared:
            return declared
        return _derive_name(self._controller_type)

    @property
    def controller_name(self) -> str:
        return self._controller_name

    @property
    def controller_type(self) -> Type:
        return self._controller_type

    @property
    def is_version_neutral(self) -> bool:
        return bool(self.custom_attributes(ApiVersionNeutralAttribute))

    def create_controller(self, request: Any) -> Any:
        return self.factory.create(self._controller_type, request)

    def custom_attributes(self, attr_type: Type[T], inherit: bool = True) -> List[T]:
        classes = self._controller_type.__mro__ if inherit else (self._controller_type,)
        found = []
        for cls in classes:
            found.extend(a for a in own_attributes(cls) if isinstance(a, attr_type))
        return distinct(found)

    def _versions(self, deprecated: Optional[bool]) -> frozenset:
        versions = set()
        for attr in self.custom_attributes(ApiVersionAttribute):
            if deprecated is None or attr.deprecated == deprecated:
                versions.update(attr.versions)
        return frozenset(versions)

    def declared_versions(self) -> frozenset:
        if self.is_version_neutral:
            return frozenset()
        versions = self._versions(None)
        if not versions:
            return frozenset({self.configuration.default_api_version})
        return versions

    def supported_versions(self) -> frozenset:
        """Declared versions that are not only deprecated."""
        if self.is_version_neutral:
            return frozenset()
        return self.declared_versions() - self.deprecated_versions()

    def deprecated_versions(self) -> frozenset:
        """Versions only ever declared as deprecated."""
        if self.is_version_neutral:
            return frozenset()
        return self._versions(True) - self._versions(False)

    def filters(self) -> List[Any]:
        found = []
        for cls in self._controller_type.__mro__:
            found.extend(cls.__dict__.get("pipeline", ()))
        return distinct(found)

    def __repr__(self) -> str:
        versions = ", ".join(str(v) for v in sorted(self.declared_versions()))
        return (
            f"ControllerDescriptor({self._controller_type.__name__}, "
            f"name={self._controller_name!r}, versions=[{versions}])"
        )


__all__ = ["Controller", "Descriptor", "ControllerDescriptor", "distinct"]
