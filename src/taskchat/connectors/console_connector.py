# src/taskchat/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import ConsoleSession
from ..cli.commands import registry as command_registry
from ..core.errors import ServiceError

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def run_console_loop(session: ConsoleSession) -> None:
    logger.info("Console connector started (caller=%s).", session.caller)
    _print_ts("[CONSOLE] Type your messages. Use /help for commands. Use /exit to quit.\n")

    app_name = str(getattr(session.settings, "app_name", "taskchat"))

    while True:
        try:
            user_input = (await asyncio.to_thread(input, f">>> {session.caller}: ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = await command_registry.handle(session, user_input)
            if cmd_response is not None:
                _print_ts(cmd_response)
                continue

            reply = await session.service.send_message(session.caller, user_input)
        except ServiceError as e:
            _print_ts(f"[ERROR] {e.message}")
            continue
        except Exception:
            logger.exception("Console handler crashed.")
            _print_ts("Internal error while handling input.")
            continue

        _print_ts(f"<<< {app_name}: {reply.content}\n")

    logger.info("Console connector finished.")
