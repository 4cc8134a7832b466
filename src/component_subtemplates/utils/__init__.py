"""Internal helpers for component sub-templates."""

from component_subtemplates.utils.type_flags import TypeFlags

__all__ = ["TypeFlags"]
