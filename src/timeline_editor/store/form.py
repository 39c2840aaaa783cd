"""Editable field model mirroring the active item, plus its sync into the store."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from timeline_editor.boundaries import ItemCollection, parse_item_path
from timeline_editor.models import GEOMETRY_FIELDS

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str, Any], None]


class FormModel:
    def __init__(self, model: str = "local.timeline") -> None:
        self.model = model
        self._values: dict[str, Any] = {}
        self._listeners: list[ChangeListener] = []

    def load(self, path: str, value: Any) -> None:
        if isinstance(value, Mapping):
            # A mapping replaces the whole record, so keys it lacks must not linger.
            head = f"{path}."
            self._values = {key: kept for key, kept in self._values.items() if not key.startswith(head)}
            for key, nested in value.items():
                self._values[f"{path}.{key}"] = nested
            return
        self._values[path] = value

    def change(self, path: str, value: Any) -> None:
        self._values[path] = value
        for listener in list(self._listeners):
            listener(path, value)

    def get(self, path: str, default: Any = None) -> Any:
        return self._values.get(path, default)

    def values_for(self, prefix: str) -> dict[str, Any]:
        head = f"{prefix}."
        return {path[len(head):]: value for path, value in self._values.items() if path.startswith(head)}

    def on_change(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)


def bind_form_to_collection(form: FormModel, collection: ItemCollection) -> None:
    """Forward user edits of ``<model>[i].<field>`` into collection updates."""

    def _forward(path: str, value: Any) -> None:
        parsed = parse_item_path(path)
        if parsed is None:
            return
        model, index, field = parsed
        if model != form.model or field is None:
            return
        if field in GEOMETRY_FIELDS:
            try:
                value = int(value)
            except (TypeError, ValueError):
                logger.warning("ignoring non-numeric %s=%r for item %s", field, value, index)
                return
        collection.update(index, {field: value})

    form.on_change(_forward)
