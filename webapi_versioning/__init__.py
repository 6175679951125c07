"""
Webapi Versioning

API-versioned controllers for Aquilia-style class-based controllers.

One logical controller name can be served by several controller classes,
each implementing different API versions. A ControllerDescriptorGroup
picks the class for each request from the API version it asks for.

Example:
    from webapi_versioning import (
        Controller, ControllerRegistry, api_version, controller_name,
    )

    @api_version("1.0")
    class UsersController(Controller):
        ...

    @api_version("2.0")
    @controller_name("users")
    class UsersV2Controller(Controller):
        ...

    registry = ControllerRegistry()
    registry.register(UsersController)
    registry.register(UsersV2Controller)

    controller = registry.get("users").create_controller(request)
"""

from .version import ApiVersion
from .faults import (
    Fault,
    FaultDomain,
    Severity,
    VersioningFault,
    InvalidArgumentFault,
    IndexOutOfRangeFault,
    InvalidApiVersionFault,
    AmbiguousApiVersionFault,
    ConfigInvalidFault,
)
from .attributes import (
    ApiVersionAttribute,
    ApiVersionNeutralAttribute,
    ControllerNameAttribute,
    attribute,
    api_version,
    api_version_neutral,
    controller_name,
)
from .readers import (
    ApiVersionReader,
    QueryStringApiVersionReader,
    HeaderApiVersionReader,
    MediaTypeApiVersionReader,
    CombinedApiVersionReader,
)
from .config import VersioningConfig
from .request import requested_api_version
from .factory import ControllerFactory
from .descriptor import Controller, Descriptor, ControllerDescriptor, distinct
from .group import ControllerDescriptorGroup
from .registry import ControllerRegistry

__version__ = "0.1.0"

__all__ = [
    # Versions
    "ApiVersion",

    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "VersioningFault",
    "InvalidArgumentFault",
    "IndexOutOfRangeFault",
    "InvalidApiVersionFault",
    "AmbiguousApiVersionFault",
    "ConfigInvalidFault",

    # Attributes
    "ApiVersionAttribute",
    "ApiVersionNeutralAttribute",
    "ControllerNameAttribute",
    "attribute",
    "api_version",
    "api_version_neutral",
    "controller_name",

    # Readers
    "ApiVersionReader",
    "QueryStringApiVersionReader",
    "HeaderApiVersionReader",
    "MediaTypeApiVersionReader",
    "CombinedApiVersionReader",
    "requested_api_version",

    # Config
    "VersioningConfig",

    # Descriptors
    "Controller",
    "Descriptor",
    "ControllerDescriptor",
    "ControllerDescriptorGroup",
    "ControllerFactory",
    "ControllerRegistry",
    "distinct",
]
