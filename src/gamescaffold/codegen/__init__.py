"""
In-process code templates that render a class name and package into source text.
"""

from __future__ import annotations

from typing import Dict, List, Protocol

from ..errors import TemplateNotFound
from .java import GameScreenLogicTemplate, JavaClassTemplate
from .kotlin import KotlinGameScreenLogicTemplate


class CodeTemplate(Protocol):
    """Minimal capability the seed emitter needs from a code template."""

    def render(self, class_name: str, package_name: str) -> bytes:
        ...

    def target_extension(self) -> str:
        ...


CODE_TEMPLATES: Dict[str, CodeTemplate] = {
    "game-screen-logic": GameScreenLogicTemplate(),
    "game-screen-logic-kotlin": KotlinGameScreenLogicTemplate(),
    "java-class": JavaClassTemplate(),
}


def get_code_template(identifier: str) -> CodeTemplate:
    """
    Resolve a code template by the identifier a template descriptor declares.

    Raises:
        TemplateNotFound: If no code template is registered under identifier.
    """
    try:
        return CODE_TEMPLATES[identifier]
    except KeyError:
        known = ", ".join(sorted(CODE_TEMPLATES))
        raise TemplateNotFound(f"Unknown code template '{identifier}' (known: {known})") from None


def available_code_templates() -> List[str]:
    return sorted(CODE_TEMPLATES)


__all__ = [
    "CodeTemplate",
    "CODE_TEMPLATES",
    "GameScreenLogicTemplate",
    "JavaClassTemplate",
    "KotlinGameScreenLogicTemplate",
    "available_code_templates",
    "get_code_template",
]
