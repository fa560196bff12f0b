"""
Twitch Helix Python Client - Basic Usage Example

Reads credentials from TWITCH_CLIENT_ID / TWITCH_CLIENT_SECRET (and, for the
user example, TWITCH_ACCESS_TOKEN / TWITCH_REFRESH_TOKEN).
"""

import asyncio
import logging

from twitch_helix import (
    ApiError,
    AuthFatalError,
    HttpError,
    TokenResult,
    TwitchAsyncClient,
    TwitchClient,
    TwitchConfig,
)


def app_example():
    """App token example: public data only."""
    print("=== App Token Example ===\n")

    client = TwitchClient(TwitchConfig.from_env(is_app=True, access_token=None, debug=True))

    @client.on("error")
    def on_error(error: ApiError):
        print(f"API error: {error.code} {error.message}")

    client.on("ready", lambda: print("Client ready"))

    try:
        client.connect()
        users = client.get_users(["ninja", "12826"])
        for user in users.get("data", []):
            print(f"{user['id']}: {user['display_name']}")

        streams = client.get_streams({"channels": "ninja", "first": 1})
        print(f"Live streams: {len(streams.get('data', []))}")
    except HttpError as e:
        print(f"Request failed: {e.message}")
    except AuthFatalError as e:
        print(f"Authentication failed: {e.message}")
    finally:
        client.close()


async def user_example():
    """User token example with refresh notifications."""
    print("\n=== User Token Example ===\n")

    def on_refresh(token: TokenResult):
        # Persist token.access_token / token.refresh_token here if needed
        print(f"Token refreshed, expires in {token.expires_in}s")

    try:
        async with TwitchAsyncClient(TwitchConfig.from_env()) as client:
            client.on("refresh", on_refresh)
            print(f"Logged in as: {client.user.display_name if client.user else '?'}")

            follows = await client.get_follows(to_id=client.user.id if client.user else None, first=5)
            print(f"Followers: {follows.get('total')}")
    except Exception as e:
        print(f"Error (expected without real credentials): {type(e).__name__}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app_example()
    asyncio.run(user_example())
