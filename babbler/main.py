"""Module entrypoint for launching the babbler."""
from __future__ import annotations

import argparse
import platform
import sys
from typing import Sequence

from .application.bootstrap import initialize_services
from .application.replies import BufferedReplySink
from .config import load_config
from .integrations.console import ConsoleReplySink, run_console
from .logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="babbler",
        description="Markov-chain babbler that learns how people talk.",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Chat on stdin/stdout instead of launching the web page.",
    )
    parser.add_argument(
        "--user",
        default=None,
        help="Name to speak as in console mode (defaults to BABBLER_DEFAULT_USER).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    logger = setup_logging(config)
    logger.info("Starting babbler")
    logger.info("Log file: %s", config.log_file)
    logger.debug(
        "Config: BABBLER_STORAGE=%s BABBLER_DB_PATH=%s BABBLER_DB_TABLE_PREFIX=%s "
        "BABBLER_QUOTES_ENABLED=%s BABBLER_QUOTES_DB_PATH=%s BABBLER_QUOTES_TABLE=%s "
        "BABBLER_RANDOM_SEED=%s BABBLER_MAX_WORDS=%s",
        config.storage_backend,
        config.db_path,
        config.db_table_prefix,
        config.quotes_enabled,
        config.quotes_db_path,
        config.quotes_table,
        config.random_seed,
        config.max_words,
    )
    logger.debug("Python version: %s", sys.version.replace("\n", " "))
    logger.debug("Platform: %s", platform.platform())

    if args.console:
        services = initialize_services(
            config=config,
            logger=logger,
            reply_sink=ConsoleReplySink(),
        )
        run_console(
            services.interpreter,
            user=args.user or config.default_user,
            logger=logger,
        )
        return 0

    from .ui.gradio_app import create_gradio_app

    reply_sink = BufferedReplySink()
    services = initialize_services(config=config, logger=logger, reply_sink=reply_sink)
    app = create_gradio_app(
        config=config,
        logger=logger,
        interpreter=services.interpreter,
        reply_sink=reply_sink,
    )
    logger.info(
        "Launching chat page on %s:%s",
        config.ui_server_name,
        config.ui_server_port,
    )
    app.launch(server_name=config.ui_server_name, server_port=config.ui_server_port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
