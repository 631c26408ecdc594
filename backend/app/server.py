"""
Greeter Backend - Process Entrypoint
======================================

What:  Command-line entrypoint that binds the listening socket and runs
       uvicorn on it.
How:   The socket is bound here, before uvicorn starts, so a port that is
       already taken is reported as a clear diagnostic with a distinct exit
       code instead of a server that never comes up.
Who:   `python -m app` and the `greeter` console script.

Exit codes (sysexits.h where applicable):
    0   SUCCESS         server ran and shut down cleanly
    1   GENERAL_ERROR   anything unexpected
    69  BIND_FAILURE    EX_UNAVAILABLE: could not bind host:port
    78  CONFIG_ERROR    EX_CONFIG: invalid settings or flags
"""

import logging
import socket
import sys
from argparse import ArgumentParser
from enum import IntEnum
from typing import List, Optional

import uvicorn
from fastapi import FastAPI

from app.config import load_settings
from app.exceptions import ConfigurationError, ServerStartupError
from app.main import create_app, setup_logging

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    BIND_FAILURE = 69
    CONFIG_ERROR = 78


def build_parser() -> ArgumentParser:
    prog = 'python -m app' if sys.argv[0].endswith('__main__.py') else 'greeter'
    parser = ArgumentParser(prog=prog, description='Serve GET /hello and GET /goodbye.')
    parser.add_argument(
        '--host', dest='host', type=str, default=None,
        help='interface to bind (default: SERVER_HOST or 0.0.0.0)')
    parser.add_argument(
        '--port', dest='port', type=int, default=None,
        help='port to listen on (default: SERVER_PORT or 8080)')
    parser.add_argument(
        '--log-level', dest='log_level', type=str, default=None,
        help='DEBUG, INFO, WARNING, ERROR or CRITICAL (default: LOG_LEVEL or INFO)')
    return parser


def bind_socket(host: str, port: int) -> socket.socket:
    """
    Create a TCP socket bound to host:port.

    IPv6 is used when the host looks like an IPv6 address. The returned
    socket is bound but not yet listening; uvicorn calls listen() on it.

    Raises:
        ServerStartupError: the address is in use, not available, or not
                            permitted.
    """
    family = socket.AF_INET6 if ':' in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        raise ServerStartupError(host, port, reason=e) from e
    sock.set_inheritable(True)
    return sock


def serve(app: FastAPI, sock: socket.socket) -> None:
    """Run uvicorn on an already-bound socket until it is told to stop."""
    # log_config=None keeps the logging set up by setup_logging()
    config = uvicorn.Config(app, log_config=None, access_log=False)
    uvicorn.Server(config).run(sockets=[sock])


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging()

    try:
        settings = load_settings(
            server_host=args.host, server_port=args.port, log_level=args.log_level)
    except ConfigurationError as e:
        logger.error("%s", e.message)
        return ExitCode.CONFIG_ERROR

    setup_logging(settings.log_level)

    try:
        sock = bind_socket(settings.server_host, settings.server_port)
    except ServerStartupError as e:
        logger.error("%s", e.message)
        logger.error("Is another process already listening on port %d?", e.port)
        return ExitCode.BIND_FAILURE

    try:
        serve(create_app(settings), sock)
    except Exception:
        logger.exception("Server stopped unexpectedly")
        return ExitCode.GENERAL_ERROR
    finally:
        sock.close()

    return ExitCode.SUCCESS
