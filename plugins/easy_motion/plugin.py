"""
Easy Motion Plugin - jump to a visible row by label.

Does not define disable(); the host's default disable unwinds its
registrations and asks for a reload.
"""

from pluginhost.host import ModeMetadata
from pluginhost.plugins import PluginApi


async def enable(api: PluginApi):
    mode = api.register_mode(
        ModeMetadata(name="EASY_MOTION", description="Pick a row to jump to")
    )

    def jump(session, row):
        session.cursor.row = row

    api.register_motion("easy-motion", "Jump to a visible row", jump)
    jumps = await api.get_data("jumps", 0)
    return {"mode": mode.name, "jumps": jumps}
