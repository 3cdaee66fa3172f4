import argparse
import json
import logging
import sys

from dateutil.parser import isoparse

import promiseparser


def entrance(argv=None):
    promiseparser_argparse = argparse.ArgumentParser(
        description="promiseparser: extract promise dates from text."
    )
    promiseparser_argparse.add_argument(
        "text",
        nargs="?",
        help="Text to analyze. Read from standard input when omitted",
    )
    promiseparser_argparse.add_argument(
        "--base-date",
        "--reference-date",
        type=str,
        help="Reference date of relative phrases (YYYY-MM-DD). Defaults to today",
    )
    promiseparser_argparse.add_argument(
        "--history",
        help="Keep values of self-contradicting phrases",
        action="store_true",
    )
    promiseparser_argparse.add_argument(
        "-v",
        "--verbose",
        help="Log rule matching",
        action="store_true",
    )

    args = promiseparser_argparse.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    reference_date = None
    if args.base_date:
        try:
            reference_date = isoparse(args.base_date).date()
        except ValueError:
            promiseparser_argparse.error(
                f"promiseparser: invalid --base-date '{args.base_date}'"
            )

    text = args.text if args.text is not None else sys.stdin.read()
    results = promiseparser.extract(
        text, reference_date=reference_date, history_mode=args.history
    )
    logging.info(f"promiseparser: {len(results)} dates found")

    print(json.dumps([result.to_dict() for result in results], indent=2))
    return 0
