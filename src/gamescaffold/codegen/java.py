"""
Java class templates used to seed generated projects.
"""

from __future__ import annotations

from dataclasses import dataclass

JAVA_EXTENSION = "java"

JAVA_CLASS_TEMPLATE = """package {package_name};

public class {class_name} {{

    public {class_name}() {{
    }}
}}
"""

GAME_SCREEN_LOGIC_TEMPLATE = """package {package_name};

import org.robok.engine.core.Screen;

/**
 * Entry screen of the game. Generated when the project was created.
 */
public class {class_name} implements Screen {{

    @Override
    public void create() {{
        // Load assets and build the initial scene here.
    }}

    @Override
    public void update(float delta) {{
        // Advance game logic by delta seconds.
    }}

    @Override
    public void render() {{
    }}

    @Override
    public void resize(int width, int height) {{
    }}

    @Override
    public void dispose() {{
        // Release resources acquired in create().
    }}
}}
"""


@dataclass(frozen=True)
class JavaClassTemplate:
    """
    A Java source file parameterized by class and package name.

    Subclasses swap in a different body; the text is formatted with
    `class_name` and `package_name` and encoded as UTF-8.
    """

    body: str = JAVA_CLASS_TEMPLATE
    extension: str = JAVA_EXTENSION

    def render(self, class_name: str, package_name: str) -> bytes:
        return self.render_text(class_name, package_name).encode("utf-8")

    def render_text(self, class_name: str, package_name: str) -> str:
        return self.body.format(class_name=class_name, package_name=package_name)

    def target_extension(self) -> str:
        return self.extension


@dataclass(frozen=True)
class GameScreenLogicTemplate(JavaClassTemplate):
    """Game screen with the engine lifecycle callbacks stubbed out."""

    body: str = GAME_SCREEN_LOGIC_TEMPLATE
