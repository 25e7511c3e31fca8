"""Player identity resolution."""
import logging

from domain.entities import Player
from domain.interfaces import IPlayerDataSource

logger = logging.getLogger(__name__)


async def ensure_puuid(source: IPlayerDataSource, player: Player) -> str:
    """Resolve and store the player's puuid once; later calls are free."""
    if player.puuid:
        return player.puuid
    player.puuid = await source.resolve_identity(player.riot_id.game_name, player.riot_id.tag_line)
    logger.info(f"Resolved {player.riot_id} -> {player.puuid[:12]}...")
    return player.puuid
