#!/usr/bin/env python3
"""
EasyCommands - Example Bot Entry Point

Registers the default executors, builds the connection (which syncs the
slash commands) and sets a presence once the bot is ready.
"""

import sys
import signal

import discord

from easycommands import EasyCommands
from easycommands.defaults import HelpCmd, PingCmd
from easycommands.utils.environ import DISCORD_BOT_TOKEN
from easycommands.utils.logging import logger

def signal_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logger.info(f"Received signal {signum}, initiating shutdown...")
    sys.exit(0)

def setup(easy_commands: EasyCommands) -> discord.Client:
    return (
        easy_commands
        .register_listeners()
        .add_executor(HelpCmd(easy_commands.registry), PingCmd())
        .add_enabled_cache_flags()
        .add_gateway_intents()
        .build()
    )

def main():
    """Main application entry point."""
    easy_commands = None
    try:
        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        logger.info("=" * 60)
        logger.info("🤖 EasyCommands Example Bot Starting")
        logger.info("=" * 60)

        if not DISCORD_BOT_TOKEN:
            logger.error("❌ DISCORD_BOT_TOKEN environment variable is required")
            logger.error("Please set your Discord bot token and try again.")
            sys.exit(1)

        easy_commands = EasyCommands(DISCORD_BOT_TOKEN)
        client = setup(easy_commands)
        easy_commands.run(client.change_presence(activity=discord.Game("with commands")))
        easy_commands.block()

    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except discord.LoginFailure:
        logger.error("❌ Discord rejected the bot token")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error starting bot: {e}")
        sys.exit(1)
    finally:
        if easy_commands is not None:
            easy_commands.shutdown()
        logger.info("🤖 EasyCommands Example Bot Shutdown Complete")

if __name__ == "__main__":
    main()
