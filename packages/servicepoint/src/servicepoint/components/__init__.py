from .factory import ComponentDefinition, ComponentFactory

__all__ = ["ComponentDefinition", "ComponentFactory"]
