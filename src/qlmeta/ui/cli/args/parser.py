"""Command line argument parser."""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final, final

from qlmeta.features.metadata.domain.custom_fields import FieldType, decode_value
from qlmeta.platform.logging import DEFAULT_LOG_FILE, setup_logger
from qlmeta.ui.cli.args.options import AttributeArgs, AttributeKind, TargetArgs

_FIELD_TYPE_CHOICES: Final[dict[str, FieldType]] = {
    "string": FieldType.STRING,
    "int": FieldType.INTEGER,
    "double": FieldType.DOUBLE,
    "bool": FieldType.BOOLEAN,
}


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def _common_options() -> argparse.ArgumentParser:
        """Options accepted by every action, placed after the action name."""

        common = argparse.ArgumentParser(add_help=False)
        _ = common.add_argument(
            "--artist",
            required=True,
            metavar="ID",
            help="Artist id; the root of the inheritance chain",
        )
        _ = common.add_argument("--album", metavar="ID", help="Album id under the artist")
        _ = common.add_argument("--song", metavar="ID", help="Song id under the album (or artist)")
        _ = common.add_argument(
            "--exact",
            action="store_true",
            help="Only consider the target object itself, without inherited values",
        )
        _ = common.add_argument(
            "--sqlite",
            type=str,
            metavar="PATH",
            help="Use a local SQLite database instead of the configured PostgreSQL server",
        )
        _ = common.add_argument("--verbose", action="store_true", help="Show debug logging")
        _ = common.add_argument("--quiet", action="store_true", help="Suppress all output except errors")
        return common

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="qlmeta",
            description="qlmeta - tags, descriptions, ratings and custom fields for songs, albums and artists.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        common = ArgumentParser._common_options()
        kinds = parser.add_subparsers(dest="kind", required=True)

        tags = kinds.add_parser("tags", help="Inspect or edit tags").add_subparsers(dest="action", required=True)
        _ = tags.add_parser("list", parents=[common], help="List tags, including inherited ones")
        for action, help_text in (
            ("add", "Add tags to the target"),
            ("remove", "Remove tags from the target and, unless --exact, its ancestors"),
        ):
            action_parser = tags.add_parser(action, parents=[common], help=help_text)
            _ = action_parser.add_argument("values", nargs="+", metavar="TAG")
        set_tags = tags.add_parser("set", parents=[common], help="Replace every tag on the target")
        _ = set_tags.add_argument("values", nargs="*", metavar="TAG")

        description = kinds.add_parser("description", help="Inspect or edit the description").add_subparsers(
            dest="action", required=True
        )
        _ = description.add_parser("get", parents=[common], help="Show the nearest description")
        set_description = description.add_parser("set", parents=[common], help="Set the target's description")
        _ = set_description.add_argument("values", nargs=1, metavar="TEXT")
        _ = description.add_parser("remove", parents=[common], help="Delete the target's description")

        rating = kinds.add_parser("rating", help="Inspect or edit the rating").add_subparsers(
            dest="action", required=True
        )
        _ = rating.add_parser("get", parents=[common], help="Show the nearest rating")
        set_rating = rating.add_parser("set", parents=[common], help="Set the target's rating")
        _ = set_rating.add_argument("values", nargs=1, metavar="VALUE")
        _ = rating.add_parser("remove", parents=[common], help="Delete the target's rating")

        fields = kinds.add_parser("field", help="Inspect or edit custom fields").add_subparsers(
            dest="action", required=True
        )
        get_field = fields.add_parser("get", parents=[common], help="Show the nearest value of a field")
        _ = get_field.add_argument("name", metavar="NAME")
        set_field = fields.add_parser("set", parents=[common], help="Set a field on the target")
        _ = set_field.add_argument("name", metavar="NAME")
        _ = set_field.add_argument("values", nargs=1, metavar="VALUE")
        _ = set_field.add_argument(
            "--type",
            dest="field_type",
            choices=sorted(_FIELD_TYPE_CHOICES),
            default="string",
            help="Type of VALUE (default: string)",
        )
        _ = fields.add_parser("list", parents=[common], help="Show every visible field")
        remove_field = fields.add_parser("remove", parents=[common], help="Delete a field from the target")
        _ = remove_field.add_argument("name", metavar="NAME")

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> AttributeArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            AttributeArgs: Processed command line arguments.

        Raises:
            SystemExit: If the arguments are invalid.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(parsed_args.quiet)
        is_verbose = bool(parsed_args.verbose)
        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.WARNING
        _ = setup_logger(log_file=DEFAULT_LOG_FILE, console_level=log_level)

        kind: AttributeKind = parsed_args.kind
        values: list[str] = list(getattr(parsed_args, "values", None) or [])
        field_type = _FIELD_TYPE_CHOICES[getattr(parsed_args, "field_type", "string")]

        if kind == "rating" and parsed_args.action == "set":
            try:
                _ = float(values[0])
            except ValueError:
                parser.error(f"invalid rating value: {values[0]!r}")
        if kind == "field" and parsed_args.action == "set":
            try:
                _ = decode_value(field_type, values[0])
            except ValueError:
                parser.error(f"invalid {field_type.name.lower()} value: {values[0]!r}")

        return AttributeArgs(
            kind=kind,
            action=parsed_args.action,
            target=TargetArgs(
                artist_id=parsed_args.artist,
                album_id=parsed_args.album,
                song_id=parsed_args.song,
            ),
            inherit=not parsed_args.exact,
            values=values,
            field_name=getattr(parsed_args, "name", None),
            field_type=field_type,
            sqlite_path=Path(parsed_args.sqlite).expanduser() if parsed_args.sqlite else None,
            verbose=is_verbose,
            quiet=is_quiet,
        )


__all__ = ["ArgumentParser"]
