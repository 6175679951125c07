"""
Controller Factory

Handles controller instantiation with constructor injection.
"""

from typing import Any, Dict, List, Optional, Tuple, Type, get_type_hints
import inspect
import logging


logger = logging.getLogger("webapi_versioning.factory")

CONTAINER_STATE_KEYS = ("di_container", "container")

_EMPTY = inspect.Parameter.empty


class ControllerFactory:
    """
    Factory for creating controller instances.

    Constructor parameters are resolved from the request-scoped container
    (``request.state["di_container"]`` or ``request.state["container"]``)
    or, failing that, the factory's own container. A container is anything
    with ``resolve(type)`` or ``get(type)``.
    """

    # Class-level cache for constructor analysis
    _ctor_info_cache: Dict[Type, List[Tuple[str, Any, bool, Any]]] = {}

    def __init__(self, container: Optional[Any] = None):
        self.container = container

    def create(self, controller_class: Type, request: Optional[Any] = None) -> Any:
        """
        Create a controller instance.

        Args:
            controller_class: Controller class to instantiate
            request: Current request (source of the request container)

        Returns:
            Controller instance
        """
        container = self._request_container(request) or self.container
        instance = self._resolve_and_instantiate(controller_class, container)
        logger.debug("Created controller %s", controller_class.__name__)
        return instance

    @staticmethod
    def _request_container(request: Optional[Any]) -> Optional[Any]:
        state = getattr(request, "state", None)
        if not isinstance(state, dict):
            return None
        for key in CONTAINER_STATE_KEYS:
            if state.get(key) is not None:
                return state[key]
        return None

    def _resolve_and_instantiate(self, controller_class: Type, container: Optional[Any]) -> Any:
        ctor_info = ControllerFactory._ctor_info_cache.get(controller_class)
        if ctor_info is None:
            ctor_info = self._analyze_constructor(controller_class)
            ControllerFactory._ctor_info_cache[controller_class] = ctor_info

        if not ctor_info:
            return controller_class()

        params = {}
        for param_name, param_type, has_default, default_val in ctor_info:
            if param_type is _EMPTY or container is None:
                if has_default:
                    params[param_name] = default_val
                    continue
                raise TypeError(
                    f"Cannot resolve parameter '{param_name}' of "
                    f"{controller_class.__name__}: no type annotation or container"
                )
            try:
                params[param_name] = self._resolve(param_type, container)
            except Exception:
                if not has_default:
                    raise
                logger.debug(
                    "Falling back to default for %s.%s",
                    controller_class.__name__,
                    param_name,
                )
                params[param_name] = default_val

        return controller_class(**params)

    @staticmethod
    def _analyze_constructor(controller_class: Type) -> List[Tuple[str, Any, bool, Any]]:
        """Return (name, type, has_default, default) for each constructor parameter."""
        if controller_class.__init__ is object.__init__:
            return []

        sig = inspect.signature(controller_class.__init__)
        try:
            type_hints = get_type_hints(controller_class.__init__)
        except Exception:
            type_hints = {}

        result = []
        for param_name, param in sig.parameters.items():
            if param_name == "self" or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue

            param_type = type_hints.get(param_name, param.annotation)

            # A class used as the default value names the type to inject
            if param_type is _EMPTY and isinstance(param.default, type):
                param_type = param.default

            has_default = param.default is not _EMPTY
            default_val = param.default if has_default else None
            result.append((param_name, param_type, has_default, default_val))
        return result

    @staticmethod
    def _resolve(param_type: Any, container: Any) -> Any:
        if hasattr(container, "resolve"):
            return container.resolve(param_type)
        if hasattr(container, "get"):
            return container.get(param_type)
        raise TypeError(f"Container {container!r} cannot resolve dependencies")


__all__ = ["ControllerFactory"]
