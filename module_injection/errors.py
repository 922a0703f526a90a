from __future__ import annotations


class ModuleInjectionError(Exception):
    pass


class NullResolutionError(ModuleInjectionError):
    """Raised when a factory or locator yields no view-model on realize."""

    def __init__(self, key: str, source: str) -> None:
        super().__init__(f"View-model for '{key}' could not be created ({source} returned None)")
        self.key = key
        self.source = source


class CapabilityError(ModuleInjectionError):
    """Raised when a parameter is passed to a view-model that cannot accept one."""

    def __init__(self, key: str, view_model: object) -> None:
        type_name = type(view_model).__name__
        super().__init__(
            f"View-model '{type_name}' for '{key}' does not accept a parameter (missing set_parameter)"
        )
        self.key = key
        self.view_model_type = type(view_model)
