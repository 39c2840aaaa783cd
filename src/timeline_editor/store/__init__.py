"""Reference implementations of the item collection and form boundaries."""

from timeline_editor.store.collection import ItemStore
from timeline_editor.store.form import FormModel, bind_form_to_collection

__all__ = ["FormModel", "ItemStore", "bind_form_to_collection"]
