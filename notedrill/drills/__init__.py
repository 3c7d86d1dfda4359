from .item import (  # noqa: F401
    Challenge,
    Item,
    Renderer,
    Settings,
    chord_item_id,
    item_id_for,
    make_item,
    note_item_id,
    refresh_content,
)
