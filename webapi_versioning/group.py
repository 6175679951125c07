"""
Controller Descriptor Group

A descriptor made of other descriptors: several controller classes that
share one logical controller name but implement different API versions.
The group picks the implementation for each request by its requested API
version and otherwise presents itself to the framework as one descriptor.

Example:
    group = ControllerDescriptorGroup.of(
        ControllerDescriptor(UsersController),     # declares 1.0
        ControllerDescriptor(UsersV2Controller),   # declares 2.0
    )

    group.create_controller(request)   # ?api-version=2.0 -> UsersV2Controller
    group.create_controller(request)   # ?api-version=3.0 -> UsersController
    group.create_controller(request)   # no version       -> UsersController
"""

from collections.abc import Sequence
from typing import Any, Iterator, List, Optional, Type, TypeVar
import logging

from .config import VersioningConfig
from .descriptor import Descriptor, distinct
from .faults import IndexOutOfRangeFault, InvalidArgumentFault
from .request import requested_api_version


logger = logging.getLogger("webapi_versioning.group")

T = TypeVar("T")


class ControllerDescriptorGroup(Descriptor, Sequence):
    """
    An ordered, immutable, non-empty group of controller descriptors.

    The first descriptor is the default: it serves requests that specify
    no version or a version no descriptor declares. When several
    descriptors declare the requested version, the first one wins.

    Args:
        descriptors: Descriptors in priority order
        controller_name: Logical name (defaults to the first descriptor's)
        configuration: Versioning options (defaults to the first descriptor's)

    Raises:
        InvalidArgumentFault: If ``descriptors`` is None or empty
    """

    def __init__(
        self,
        descriptors: Sequence,
        *,
        controller_name: Optional[str] = None,
        configuration: Optional[VersioningConfig] = None,
    ):
        if descriptors is None:
            raise InvalidArgumentFault("descriptors")
        descriptors = tuple(descriptors)
        if not descriptors:
            raise InvalidArgumentFault("descriptors", "must contain at least one descriptor")
        if controller_name is not None and not controller_name:
            raise InvalidArgumentFault("controller_name")

        self._first = descriptors[0]
        self._descriptors = descriptors
        self._controller_name = controller_name or self._first.controller_name
        self.configuration = (
            configuration
            or getattr(self._first, "configuration", None)
            or VersioningConfig()
        )

    @classmethod
    def of(
        cls,
        *descriptors: Descriptor,
        controller_name: Optional[str] = None,
        configuration: Optional[VersioningConfig] = None,
    ) -> "ControllerDescriptorGroup":
        """Build a group from descriptors given as arguments."""
        return cls(descriptors, controller_name=controller_name, configuration=configuration)

    # ========================================================================
    # Descriptor
    # ========================================================================

    @property
    def controller_name(self) -> str:
        return self._controller_name

    @property
    def controller_type(self) -> Type:
        return self._first.controller_type

    def select(self, request: Any) -> Descriptor:
        """
        Choose the descriptor that serves ``request``.

        Raises:
            InvalidArgumentFault: If ``request`` is None
        """
        if request is None:
            raise InvalidArgumentFault("request")

        if len(self._descriptors) == 1:
            return self._first

        version = requested_api_version(request, self.configuration)
        if version is None:
            logger.debug("%s: no API version requested, using default", self._controller_name)
            return self._first

        for descriptor in self._descriptors:
            if version in descriptor.declared_versions():
                logger.debug(
                    "%s: API version %s served by %s",
                    self._controller_name,
                    version,
                    descriptor.controller_type.__name__,
                )
                return descriptor

        logger.debug("%s: API version %s not declared, using default", self._controller_name, version)
        return self._first

    def create_controller(self, request: Any) -> Any:
        """Create the controller for the descriptor matching the request's version."""
        return self.select(request).create_controller(request)

    def declared_versions(self) -> frozenset:
        """Union of the versions declared by every descriptor in the group."""
        versions = set()
        for descriptor in self._descriptors:
            versions.update(descriptor.declared_versions())
        return frozenset(versions)

    def custom_attributes(self, attr_type: Type[T], inherit: bool = True) -> List[T]:
        """Attributes from every descriptor in group order, duplicates removed."""
        attributes: List[T] = []
        for descriptor in self._descriptors:
            attributes.extend(descriptor.custom_attributes(attr_type, inherit))
        return distinct(attributes)

    def filters(self) -> List[Any]:
        """Filters from every descriptor in group order, duplicates removed."""
        filters: List[Any] = []
        for descriptor in self._descriptors:
            filters.extend(descriptor.filters())
        return distinct(filters)

    # ========================================================================
    # Sequence
    # ========================================================================

    def __getitem__(self, index: int) -> Descriptor:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgumentFault("index", "must be an integer")
        if not 0 <= index < len(self._descriptors):
            raise IndexOutOfRangeFault(index, len(self._descriptors))
        return self._descriptors[index]

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[Descriptor]:
        return iter(self._descriptors)

    def __repr__(self) -> str:
        members = ", ".join(d.controller_type.__name__ for d in self._descriptors)
        return f"ControllerDescriptorGroup({self._controller_name!r}, [{members}])"


__all__ = ["ControllerDescriptorGroup"]
