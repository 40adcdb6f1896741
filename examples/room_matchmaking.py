# Example Room matchmaking flow: one player hosts a room, another finds it in the
# room list and joins, then the host completes the gathering.
import argparse
import asyncio
import logging

from gs2_matchmaking import ClientConfig, Gs2MatchmakingClient
from gs2_matchmaking.client import ConflictError

logger = logging.getLogger(__name__)


async def host_and_join(client: Gs2MatchmakingClient, args) -> None:
    created = await client.room_create_gathering(
        {
            "matchmakingName": args.matchmaking,
            "accessToken": args.host_token,
            "meta": args.meta,
        }
    )
    gathering_id = created.item.gathering_id
    logger.info("Host created room %s", gathering_id)

    guest = {"matchmakingName": args.matchmaking, "accessToken": args.guest_token}
    async for room in client.iter_room_gatherings(guest):
        logger.info("Found room %s (%s)", room.gathering_id, room.meta)
        if room.gathering_id != gathering_id:
            continue
        try:
            await client.room_join_gathering({**guest, "gatheringId": gathering_id})
        except ConflictError:
            # Filled up between listing and joining
            logger.warning("Room %s is already full", gathering_id)
            return
        break
    else:
        logger.warning("Room %s is not in the room list", gathering_id)
        return

    host = {
        "matchmakingName": args.matchmaking,
        "gatheringId": gathering_id,
        "accessToken": args.host_token,
    }
    players = await client.room_describe_joined_user(host)
    logger.info("Players in room: %s", ", ".join(players.items))

    await client.room_early_complete_gathering(host)
    logger.info("Room %s completed", gathering_id)


async def main(args):
    config = ClientConfig.load(args.config)
    async with Gs2MatchmakingClient.from_config(config) as client:
        await host_and_join(client, args)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="GS2 Room matchmaking example")
    parser.add_argument(
        "--config", type=str, default=None, help="Client configuration YAML"
    )
    parser.add_argument(
        "--matchmaking", type=str, required=True, help="Matchmaking name"
    )
    parser.add_argument(
        "--host_token", type=str, required=True, help="Access token of the host"
    )
    parser.add_argument(
        "--guest_token", type=str, required=True, help="Access token of the guest"
    )
    parser.add_argument(
        "--meta", type=str, default="mode=duel", help="Room metadata"
    )

    args = parser.parse_args()
    asyncio.run(main(args))
