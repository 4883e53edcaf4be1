#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Filter adjacent matching lines from IN_FILE (or standard input),
writing to OUT_FILE (or standard output).

Lines that differ only in leading or trailing whitespace are treated as
matching; the first line of each group is written unchanged.
"""

import argparse
import logging
import sys

from uniqr.core import __version__, config_logging, load_config
from uniqr.lib.libuniq import STDIN_NAME, Collapser, UniqError, open_sink, open_source


def main(args):
    p = argparse.ArgumentParser(prog="uniq", description=__doc__)
    p.add_argument("in_file", metavar="IN_FILE", nargs="?", default=STDIN_NAME,
                   help="input file (default: standard input)")
    p.add_argument("out_file", metavar="OUT_FILE", nargs="?", default=None,
                   help="output file (default: standard output)")
    p.add_argument("-c", "--count", action="store_true",
                   help="prefix lines by the number of occurrences")
    p.add_argument("--no-cfgfile", action="store_true",
                   help="do not load external config files")
    p.add_argument("--log-level",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                   default=None,
                   help="the logging level")
    p.add_argument("--log-file", default=None,
                   help="the file to send logging messages")
    p.add_argument("--version", action="version", version="uniqr %s" % __version__)
    ns = p.parse_args(args)

    config = load_config(no_cfgfile=ns.no_cfgfile)
    config_logging({
        "level": ns.log_level or config.get("logging", "level"),
        "file": ns.log_file or config.get("logging", "file") or None,
    })
    logger = logging.getLogger("Uniqr.Main")

    encoding = config.get("system", "encoding")
    show_count = ns.count or config.getboolean("uniq", "count")

    try:
        with open_source(ns.in_file, encoding=encoding) as source, \
                open_sink(ns.out_file, encoding=encoding,
                          fsync=config.getboolean("system", "fsync")) as sink:
            result = Collapser(show_count=show_count).process(source, sink)
        logger.info("%d lines in, %d lines out", result.lines, result.records)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user.", file=sys.stderr)
        sys.exit(1)
    except UniqError as e:
        logger.debug("%s: %r", type(e).__name__, e.__cause__)
        print("uniq: %s" % e, file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main(sys.argv[1:])
