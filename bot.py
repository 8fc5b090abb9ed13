"""
Splatoon 3 schedule bot - Discord client entry point
"""

import discord
from discord import app_commands

from config import DISCORD_BOT_TOKEN
from cogs.schedule import register_schedule_commands
from managers.schedule_manager import ScheduleClient
from models.cache import create_cache_store

# ============================================================================
# DISCORD BOT CLIENT
# ============================================================================

class ScheduleBot(discord.Client):
    """Custom Discord client serving Splatoon 3 rotations"""

    def __init__(self, *, intents: discord.Intents, schedule_client: ScheduleClient = None):
        super().__init__(intents=intents)
        self.tree = app_commands.CommandTree(self)
        self.schedule_client = schedule_client or ScheduleClient(create_cache_store())
        register_schedule_commands(self.tree, self.schedule_client)

    async def setup_hook(self):
        """Setup hook called when bot is ready"""
        # Sync commands to Discord
        await self.tree.sync()
        print("✅ Commands synced to Discord")

    async def on_ready(self):
        print(f"✅ Logged in as {self.user}")


def main():
    if not DISCORD_BOT_TOKEN:
        print("❌ DISCORD_BOT_TOKEN is not set (add it to .env)")
        raise SystemExit(1)

    intents = discord.Intents.default()
    client = ScheduleBot(intents=intents)
    client.run(DISCORD_BOT_TOKEN)


if __name__ == "__main__":
    main()
