import argparse
import logging
import sys

from superast.config_manager import ConfigManager
from superast.converter import SuperASTConverter
from superast.errors import SuperASTError

logger = logging.getLogger("superast")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Convert a Go source file into super-AST JSON")
    parser.add_argument("file", nargs="?", default="-",
                        help="Go source file to convert (default: read stdin)")
    parser.add_argument("-p", "--pretty", action="store_true",
                        help="indent the JSON output")
    parser.add_argument("-c", "--config", type=str, default=None,
                        help="YAML config file with a 'superast' section (default: config.yaml when present)")
    parser.add_argument("--entry-return-type", type=str, default=None,
                        help="return type reported for the entry function (default: void)")
    return parser.parse_args(argv)


def read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        config = ConfigManager(args.config)
    except FileNotFoundError as e:
        logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
        logger.error(str(e))
        return 1
    logging.basicConfig(level=config.log_level, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")

    options = config.builder_options()
    if args.entry_return_type:
        options["entry_return_type"] = args.entry_return_type

    try:
        code = read_source(args.file)
        output = SuperASTConverter(**options).convert(code, pretty=args.pretty or config.pretty)
    except (OSError, SuperASTError) as e:
        logger.error(str(e))
        return 1

    sys.stdout.write(output + "\n")
    return 0
