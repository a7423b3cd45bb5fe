"""Command line interface for qlmeta."""

import sys
from typing import final

from qlmeta.platform.logging import logger
from qlmeta.ui.cli.args import ArgumentParser
from qlmeta.ui.cli.commands import AttributeCommand


@final
class CommandProcessor:
    """Parse arguments, run one attribute command and translate its outcome to an exit status."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Run the command described by ``args_list`` (``sys.argv`` when None).

        Exits with the command's status when it is nonzero, 130 on Ctrl-C and
        1 on unexpected errors. Usage errors exit with 2 from argparse.
        """
        try:
            args = ArgumentParser.process_args(args_list)
            exit_code = AttributeCommand(args).execute()
            if exit_code != 0:
                logger.debug("%s %s finished with status %d", args.kind, args.action, exit_code)
                sys.exit(exit_code)

        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Console script entry point; failures leave through ``sys.exit``."""
    CommandProcessor.process_command()
    return 0


if __name__ == "__main__":
    sys.exit(main())
