"""
Word Count Plugin - annotates every row with its word count.

Registers a pluginRowContents hook on the document, an action that
re-renders the current row and a default normal-mode mapping for it.
"""

from pluginhost.plugins import Emitter, PluginApi


def enable(api: PluginApi):
    def add_word_count(obj, info):
        text = info.get("text", "")
        obj["word_count"] = len(text.split())
        return obj

    async def refresh_row():
        await api.updated_data_for_render(api.cursor.row)

    api.register_hook(Emitter.DOCUMENT, "pluginRowContents", add_word_count)
    api.register_action("word-count-refresh", "Recount words in the current row", refresh_row)
    api.register_default_mappings("NORMAL", {"word-count-refresh": [["g", "w"]]})
    api.logger.info("word count enabled")
    return {"hook": add_word_count}


def disable(api: PluginApi, value):
    api.deregister_all()
