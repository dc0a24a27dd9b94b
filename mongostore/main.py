##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
The `mongostore` console script.
"""

import logging
import sys
import traceback
from typing import List

from mongostore.cli.argparse_main import build_main_parser
from mongostore.common.enums import ReturnCode
from mongostore.log_formatter import setup_logging


LOG = logging.getLogger("mongostore")


def main(argv: List[str] = None) -> ReturnCode:
    """
    Parse the command line and run the selected command.

    Args:
        argv: The arguments to parse. Defaults to `sys.argv[1:]`.

    Returns:
        `ReturnCode.OK` if the command ran, `ReturnCode.ERROR` if no command
        was given or the command raised. The error is logged in that case.
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = build_main_parser()
    if not argv:
        parser.print_help(sys.stdout)
        return ReturnCode.ERROR
    args = parser.parse_args(argv)

    setup_logging(logger=LOG, log_level=args.level, colors=not args.no_color)

    try:
        args.func(args)
    except Exception as exc:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(exc))
        return ReturnCode.ERROR
    return ReturnCode.OK


if __name__ == "__main__":
    sys.exit(main())
