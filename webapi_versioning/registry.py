"""
Controller Registry

Collects controller classes and groups those sharing a logical
controller name into descriptor groups.
"""

from typing import Any, Dict, List, Optional, Union
import logging

from .config import VersioningConfig
from .descriptor import ControllerDescriptor, Descriptor
from .faults import InvalidArgumentFault
from .group import ControllerDescriptorGroup


logger = logging.getLogger("webapi_versioning.registry")


class ControllerRegistry:
    """
    Registry of versioned controllers.

    Example:
        registry = ControllerRegistry()
        registry.register(UsersController)
        registry.register(UsersV2Controller)

        table = registry.build()
        table["users"]   # ControllerDescriptorGroup of both classes
    """

    def __init__(self, configuration: Optional[VersioningConfig] = None, factory: Optional[Any] = None):
        self.configuration = configuration or VersioningConfig()
        self.factory = factory
        self._descriptors: List[Descriptor] = []
        self._table: Optional[Dict[str, Descriptor]] = None

    def register(self, controller: Union[type, Descriptor]) -> Descriptor:
        """
        Register a controller class or a ready-made descriptor.

        Returns:
            The registered descriptor
        """
        if controller is None:
            raise InvalidArgumentFault("controller")

        if isinstance(controller, Descriptor):
            descriptor = controller
        else:
            descriptor = ControllerDescriptor(
                controller,
                configuration=self.configuration,
                factory=self.factory,
            )

        self._descriptors.append(descriptor)
        self._table = None
        return descriptor

    def build(self) -> Dict[str, Descriptor]:
        """
        Build the controller table.

        Names served by one descriptor map to it directly; names served by
        several map to a ControllerDescriptorGroup in registration order.
        """
        by_name: Dict[str, List[Descriptor]] = {}
        for descriptor in self._descriptors:
            by_name.setdefault(descriptor.controller_name.lower(), []).append(descriptor)

        table: Dict[str, Descriptor] = {}
        for name, descriptors in by_name.items():
            if len(descriptors) == 1:
                table[name] = descriptors[0]
            else:
                table[name] = ControllerDescriptorGroup(
                    descriptors,
                    controller_name=name,
                    configuration=self.configuration,
                )
                logger.info(
                    "Grouped %d controllers under '%s': %s",
                    len(descriptors),
                    name,
                    ", ".join(d.controller_type.__name__ for d in descriptors),
                )

        self._table = table
        return table

    def get(self, name: str) -> Optional[Descriptor]:
        """Look up a controller by name (case-insensitive)."""
        if not name:
            raise InvalidArgumentFault("name")
        if self._table is None:
            self.build()
        return self._table.get(name.lower())

    def __len__(self) -> int:
        return len(self._descriptors)


__all__ = ["ControllerRegistry"]
