"""Command-line driver: bridge stdin and stdout to one IRC server."""

from __future__ import annotations

import argparse
import logging
import select
import sys
import time
from typing import TextIO

from tenacity import Retrying, retry_if_result, stop_after_delay, wait_fixed

from .constants import CONNECT_POLL_INTERVAL, CONNECT_TIMEOUT, DEFAULT_PORT, POLL_INTERVAL
from .errors import InternalError, log_error
from .irc import IRCClient, IRCCommand, KeepAlive
from .logging_config import LoggerConfigurator
from .logs.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pollirc",
        description="Connect to an IRC server, print what it sends and send stdin lines.",
    )
    parser.add_argument("host", help="server hostname or address")
    parser.add_argument("port", nargs="?", type=int, default=DEFAULT_PORT)
    parser.add_argument("--nick", required=True)
    parser.add_argument("--user", help="user name (defaults to the nick)")
    parser.add_argument("--realname", help="real name (defaults to the nick)")
    parser.add_argument(
        "--connect-interval",
        type=float,
        default=CONNECT_POLL_INTERVAL,
        help="seconds between checks of a pending connect",
    )
    parser.add_argument(
        "--connect-timeout",
        type=float,
        default=CONNECT_TIMEOUT,
        help="give up connecting after this many seconds",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=POLL_INTERVAL,
        help="maximum seconds to wait for socket or stdin activity",
    )
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser


def build_client(args: argparse.Namespace, out: TextIO | None = None) -> IRCClient:
    """Create a client wired with registration, keep-alive and echo handlers."""
    out = out or sys.stdout
    user = args.user or args.nick
    realname = args.realname or args.nick
    client = IRCClient((args.host, args.port))

    def register(irc: IRCClient) -> None:
        # Registration lines must reach the server unaltered.
        irc.send_unmodifiable(f"USER {user} * * :{realname}")
        irc.send_unmodifiable(f"NICK {args.nick}")

    def echo(irc: IRCClient, line: str) -> None:  # noqa: ARG001
        print(line, file=out, flush=True)

    def on_error_reply(irc: IRCClient, command: IRCCommand) -> None:  # noqa: ARG001
        if command.command == "ERROR":
            logger.log_event(
                "irc",
                "server_error",
                level=logging.WARNING,
                server=irc.server,
                human=f"Server error: {command.trailing or ''}",
            )

    client.on_connect = register
    client.on_message = echo
    client.on_command = KeepAlive(on_error_reply)
    return client


def wait_until_connected(
    client: IRCClient,
    interval: float = CONNECT_POLL_INTERVAL,
    timeout: float = CONNECT_TIMEOUT,
    sleep=time.sleep,
) -> bool:
    """Call ``client.connect()`` every ``interval`` seconds until it succeeds.

    Returns ``False`` once ``timeout`` elapses. Socket errors (refused,
    unreachable) are raised on the first occurrence, never retried.
    """
    retrying = Retrying(
        retry=retry_if_result(lambda connected: connected is False),
        wait=wait_fixed(interval),
        stop=stop_after_delay(timeout),
        retry_error_callback=lambda retry_state: False,
        sleep=sleep,
    )
    return retrying(client.connect)


def run(client: IRCClient, stdin: TextIO, poll_interval: float = POLL_INTERVAL) -> int:
    """Pump the client until the connection ends.

    Each stdin line is sent as one protocol line; EOF on stdin sends QUIT and
    disconnects.
    """
    stdin_open = True
    while client.is_connected():
        watched: list = [client.fileno()]
        if stdin_open:
            watched.append(stdin)
        readable, _, _ = select.select(watched, [], [], poll_interval)

        if stdin_open and stdin in readable:
            line = stdin.readline()
            if not line:
                stdin_open = False
                logger.log_event("cli", "stdin_closed", server=client.server)
                client.send("QUIT")
                client.poll_events()
                client.disconnect()
                break
            line = line.rstrip("\r\n")
            if line:
                client.send(line)

        client.poll_events()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    LoggerConfigurator(debug=True if args.debug else None).configure()
    if args.debug:
        logger.set_level(logging.DEBUG)

    client = build_client(args)
    logger.log_event("cli", "start", server=client.server)
    try:
        if not wait_until_connected(client, args.connect_interval, args.connect_timeout):
            logger.log_event(
                "cli",
                "connect_timeout",
                level=logging.ERROR,
                server=client.server,
                timeout=args.connect_timeout,
            )
            client.disconnect()
            return 1
        return run(client, sys.stdin, args.poll_interval)
    except KeyboardInterrupt:
        logger.log_event("cli", "interrupted", level=logging.WARNING, server=client.server)
        client.disconnect()
        return 0
    except (OSError, InternalError) as e:
        log_error("Client error", e, context={"server": client.server})
        client.disconnect()
        return 1
    finally:
        logger.log_event("cli", "shutdown", server=client.server)
