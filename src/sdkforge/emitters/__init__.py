"""Reference emitters that render artifacts from Jinja2 templates.

The orchestrator depends only on :class:`ArtifactEmitter`. The bundled
emitters cover one script-style target (TypeScript) and one class-style
target (C#); :func:`get_emitter` picks one for an output kind.
"""

from __future__ import annotations

from typing import Optional

from sdkforge.emitters.base import ArtifactEmitter, TemplateEmitter
from sdkforge.emitters.csharp import CSharpEmitter
from sdkforge.emitters.typescript import TypeScriptEmitter
from sdkforge.models import GeneratorSettings, OutputKind


def get_emitter(
    output_kind: OutputKind,
    settings: Optional[GeneratorSettings] = None,
) -> ArtifactEmitter:
    """Return the bundled emitter for *output_kind*.

    Script-style kinds get a :class:`TypeScriptEmitter`, the class kind a
    :class:`CSharpEmitter`.
    """
    if output_kind.is_script_style:
        return TypeScriptEmitter(settings)
    return CSharpEmitter(settings)


__all__ = [
    "ArtifactEmitter",
    "CSharpEmitter",
    "TemplateEmitter",
    "TypeScriptEmitter",
    "get_emitter",
]
