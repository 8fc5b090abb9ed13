"""
Schedule Module - Slash command and embed helpers for Splatoon 3 rotations
Compatible with discord.Client (no commands.Bot required)
"""
import datetime
import discord
from discord import app_commands
from typing import List, Optional
from rapidfuzz import fuzz, process

from config import SUPPORTED_LOCALES, MATCH_TYPE_COLORS, config
from managers.schedule_manager import ScheduleClient
from models.schedule import MatchType, ResolutionStatus, ScheduleResult
from utils.formatting import MATCH_TYPE_LABELS, format_time_window


# ============================================================================
# MODULE-LEVEL HELPER FUNCTIONS
# ============================================================================

STATUS_MESSAGES = {
    ResolutionStatus.NOT_FOUND: "📭 No {label} rotation is running at that time.",
    ResolutionStatus.FETCH_FAILED: "❌ Could not reach splatoon3.ink. Please try again later.",
    ResolutionStatus.INVALID_INPUT: "❌ Unknown match type or locale.",
    ResolutionStatus.MALFORMED_DOCUMENT: "⚠️ splatoon3.ink returned data in an unexpected shape.",
}


def search_locales(query: str, limit: int = 25) -> List[str]:
    """
    Fuzzy search supported locales

    Args:
        query: Search query (e.g. "en", "jp", "de-DE")
        limit: Max results to return

    Returns:
        List of matching locale codes
    """
    if not query:
        return SUPPORTED_LOCALES[:limit]

    results = process.extract(
        query,
        SUPPORTED_LOCALES,
        scorer=fuzz.WRatio,
        limit=limit
    )

    return [locale for locale, score, _ in results if score > 50]


def create_schedule_embed(match_type: str, result: ScheduleResult,
                          tz_name: str = None) -> Optional[discord.Embed]:
    """Create embed for a resolved schedule, or None when nothing was found"""
    if not result.found:
        return None

    info = result.info
    embed = discord.Embed(
        title=f"🦑 {MATCH_TYPE_LABELS.get(match_type, match_type)}",
        color=MATCH_TYPE_COLORS.get(match_type, MATCH_TYPE_COLORS['Default'])
    )
    embed.add_field(name="Rule", value=info.rule, inline=False)
    embed.add_field(name="Stages", value="\n".join(f"• {stage}" for stage in info.stages), inline=False)
    embed.set_footer(text=format_time_window(info.start_time, info.end_time, tz_name or config.DISPLAY_TIMEZONE))

    return embed


def describe_failure(match_type: str, result: ScheduleResult) -> str:
    """Short user-facing message for a non-found result"""
    template = STATUS_MESSAGES.get(result.status, "❌ Something went wrong.")
    return template.format(label=MATCH_TYPE_LABELS.get(match_type, match_type))


# ============================================================================
# COMMAND REGISTRATION
# ============================================================================

MATCH_TYPE_CHOICES = [
    app_commands.Choice(name=MATCH_TYPE_LABELS[mt.value], value=mt.value)
    for mt in MatchType
]


def register_schedule_commands(tree: app_commands.CommandTree, schedule_client: ScheduleClient):
    """Attach /splatoon to a command tree"""

    async def locale_autocomplete(interaction: discord.Interaction, current: str) -> List[app_commands.Choice[str]]:
        return [app_commands.Choice(name=locale, value=locale) for locale in search_locales(current)]

    @tree.command(name="splatoon", description="Show the current Splatoon 3 rotation")
    @app_commands.describe(match_type="Battle type", locale="Language for rule and stage names")
    @app_commands.choices(match_type=MATCH_TYPE_CHOICES)
    @app_commands.autocomplete(locale=locale_autocomplete)
    async def splatoon_command(interaction: discord.Interaction,
                               match_type: app_commands.Choice[str],
                               locale: Optional[str] = None):
        """Display the rotation that is live right now"""
        await interaction.response.defer()

        now = datetime.datetime.now(datetime.timezone.utc)
        result = await schedule_client.resolve(now, match_type.value, locale)

        embed = create_schedule_embed(match_type.value, result)
        if embed is None:
            await interaction.followup.send(describe_failure(match_type.value, result), ephemeral=True)
            return

        await interaction.followup.send(embed=embed)

    return splatoon_command
