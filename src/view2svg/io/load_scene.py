"""
Scene loading for view2svg.

A scene file is the JSON form of a ViewScene: one view with its frame and the
geometry of every element visible in it.
"""

import json
import os

from view2svg.models import ViewScene
from view2svg.tracer import get_tracer, trace


@trace(label="load_scene")
def load_scene(path):
    """
    Load and validate a view scene from disk.

    Raises FileNotFoundError if path does not exist, json.JSONDecodeError for
    malformed JSON and pydantic.ValidationError for an invalid scene.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise FileNotFoundError(f"Scene not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    scene = ViewScene.model_validate(data)

    tracer.event(
        f"Loaded scene {scene.view_id}: {len(scene.elements)} elements",
        kind=scene.kind.value,
    )

    return scene


def validate_scene_input(path):
    """
    Check that a scene path can be read.

    Returns a list of error messages (empty if valid).
    """
    errors = []

    if not os.path.exists(path):
        errors.append(f"File not found: {path}")
        return errors

    ext = os.path.splitext(path)[1].lower()
    if ext != ".json":
        errors.append(f"Unsupported scene format: {path}")

    return errors
