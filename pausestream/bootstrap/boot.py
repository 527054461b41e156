import asyncio
import logging
import os
from collections.abc import Sequence

from pausestream.bootstrap.config.loader import CONFIG_ENV, get_cli_args
from pausestream.bootstrap.demo import NumberDemo
from pausestream.bootstrap.deps import get_config
from pausestream.core.helpers.utils import setup_logging


def main(argv: Sequence[str] | None = None) -> None:
    cli = get_cli_args(argv)
    setup_logging(cli.log_level)

    # Priority: CLI > ENV
    if cli.config:
        os.environ[CONFIG_ENV] = cli.config

    demo = NumberDemo(get_config())

    try:
        asyncio.run(demo.run())
    except KeyboardInterrupt:
        logging.getLogger("bootstrap.boot").info("Interrupted, stopping demo.")


if __name__ == "__main__":
    main()
