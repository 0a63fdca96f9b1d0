from core.document_template.presets import DEFAULT_COLUMNS


def columns_with_visible(visible_ids):
    """Full default column set with exactly ``visible_ids`` shown."""
    return [col.model_copy(update={"visible": col.id in visible_ids}) for col in DEFAULT_COLUMNS]
