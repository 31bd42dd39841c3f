"""
Kotlin variant of the game screen seed.
"""

from __future__ import annotations

from dataclasses import dataclass

from .java import JavaClassTemplate

KOTLIN_EXTENSION = "kt"

KOTLIN_GAME_SCREEN_LOGIC_TEMPLATE = """package {package_name}

import org.robok.engine.core.Screen

/**
 * Entry screen of the game. Generated when the project was created.
 */
class {class_name} : Screen {{

    override fun create() {{
        // Load assets and build the initial scene here.
    }}

    override fun update(delta: Float) {{
        // Advance game logic by delta seconds.
    }}

    override fun render() {{
    }}

    override fun resize(width: Int, height: Int) {{
    }}

    override fun dispose() {{
        // Release resources acquired in create().
    }}
}}
"""


@dataclass(frozen=True)
class KotlinGameScreenLogicTemplate(JavaClassTemplate):
    body: str = KOTLIN_GAME_SCREEN_LOGIC_TEMPLATE
    extension: str = KOTLIN_EXTENSION
